from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .event import DomainEvent as DomainEvent
from .exception import (
    ArithmeticOverflowException as ArithmeticOverflowException,
)
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    DomainException as DomainException,
)
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    OptimisticLockException as OptimisticLockException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .repository import Repository as Repository
from .value_object import (
    Address as Address,
)
from .value_object import (
    Amount as Amount,
)
from .value_object import (
    Timestamp as Timestamp,
)
