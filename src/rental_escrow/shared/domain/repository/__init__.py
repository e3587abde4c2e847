from .repository import Repository as Repository
