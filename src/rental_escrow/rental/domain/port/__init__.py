from .clock import Clock as Clock
from .event_log import EventHandler as EventHandler
from .event_log import EventLog as EventLog
from .event_log import RecordedEvent as RecordedEvent
from .funds_gateway import FundsGateway as FundsGateway
