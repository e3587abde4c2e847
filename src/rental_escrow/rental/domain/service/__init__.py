from .billing_calculator import BillingCalculator as BillingCalculator
from .billing_calculator import BillingResult as BillingResult
