from .exceptions import (
    InsufficientPaymentException as InsufficientPaymentException,
)
from .exceptions import (
    InvalidPaymentException as InvalidPaymentException,
)
from .exceptions import (
    InvalidPriceException as InvalidPriceException,
)
from .exceptions import (
    ListingNotFoundException as ListingNotFoundException,
)
from .exceptions import (
    NotAvailableException as NotAvailableException,
)
from .exceptions import (
    NotRentedException as NotRentedException,
)
from .exceptions import (
    NotRenterException as NotRenterException,
)
from .exceptions import (
    ReentrancyRiskException as ReentrancyRiskException,
)
from .exceptions import (
    SelfRentalException as SelfRentalException,
)
from .exceptions import (
    TransferFailedException as TransferFailedException,
)
