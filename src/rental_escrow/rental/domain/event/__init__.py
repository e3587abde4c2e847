from .rental_events import DebugRefund as DebugRefund
from .rental_events import ItemListed as ItemListed
from .rental_events import ItemRented as ItemRented
from .rental_events import ItemReturned as ItemReturned
from .rental_events import PaymentSent as PaymentSent
from .rental_events import RefundSent as RefundSent
