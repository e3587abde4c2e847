from .address import Address as Address
from .amount import Amount as Amount
from .timestamp import Timestamp as Timestamp
