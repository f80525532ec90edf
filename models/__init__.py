from models.base import Base

from models.user import User, UserRole
from models.donation import Donation, DonationStatus

from models.payment_method import PaymentMethod
from models.communication_method import CommunicationMethod
from models.donation_reason import DonationReason

from models.activity_log import ActivityLog
