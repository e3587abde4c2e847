from .exception import (
    InsufficientPaymentException as InsufficientPaymentException,
)
from .exception import (
    InvalidPaymentException as InvalidPaymentException,
)
from .exception import (
    InvalidPriceException as InvalidPriceException,
)
from .exception import (
    ListingNotFoundException as ListingNotFoundException,
)
from .exception import (
    NotAvailableException as NotAvailableException,
)
from .exception import (
    NotRentedException as NotRentedException,
)
from .exception import (
    NotRenterException as NotRenterException,
)
from .exception import (
    ReentrancyRiskException as ReentrancyRiskException,
)
from .exception import (
    SelfRentalException as SelfRentalException,
)
from .exception import (
    TransferFailedException as TransferFailedException,
)
from .enum import ListingStatus as ListingStatus
from .value_object import ListingId as ListingId
from .value_object import ListingTitle as ListingTitle
from .value_object import ReturnQuote as ReturnQuote
from .value_object import SettlementPlan as SettlementPlan
from .service import BillingCalculator as BillingCalculator
from .service import BillingResult as BillingResult
from .entity import Listing as Listing
from .factory import ListingDetails as ListingDetails
from .factory import ListingFactory as ListingFactory
from .repository import ListingRepository as ListingRepository
from .port import Clock as Clock
from .port import EventLog as EventLog
from .port import FundsGateway as FundsGateway
from .port import RecordedEvent as RecordedEvent
