import enum


class UserRole(str, enum.Enum):
    CITIZEN = "CITIZEN"
    POLICE = "POLICE"
    FIRE_SERVICE = "FIRE_SERVICE"
    CITY_CORPORATION = "CITY_CORPORATION"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class ReportStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class AppealStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ReviewAction(str, enum.Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ViolationStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    DISPUTED = "DISPUTED"
    RESOLVED = "RESOLVED"


class FineStatus(str, enum.Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"
    CANCELLED = "CANCELLED"
    DISPUTED = "DISPUTED"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentMethod(str, enum.Enum):
    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    MOBILE_MONEY = "MOBILE_MONEY"
    ONLINE = "ONLINE"


class NotificationType(str, enum.Enum):
    REPORT_SUBMITTED = "REPORT_SUBMITTED"
    REPORT_APPROVED = "REPORT_APPROVED"
    REPORT_REJECTED = "REPORT_REJECTED"
    APPEAL_SUBMITTED = "APPEAL_SUBMITTED"
    APPEAL_APPROVED = "APPEAL_APPROVED"
    APPEAL_REJECTED = "APPEAL_REJECTED"
    REWARD_EARNED = "REWARD_EARNED"
    PENALTY_APPLIED = "PENALTY_APPLIED"
    DEBT_CREATED = "DEBT_CREATED"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    SYSTEM = "SYSTEM"
    INFO = "INFO"
    WARNING = "WARNING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class NotificationPriority(str, enum.Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class AccidentStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    RESPONDING = "RESPONDING"
    RESOLVED = "RESOLVED"


class AccidentSeverity(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class EmergencyService(str, enum.Enum):
    AMBULANCE = "AMBULANCE"
    FIRE_SERVICE = "FIRE_SERVICE"


class CameraStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    MAINTENANCE = "MAINTENANCE"
    OFFLINE = "OFFLINE"


class ViolationType(str, enum.Enum):
    """Violation categories a citizen can pick when reporting."""
    OVER_SPEEDING = "OVER_SPEEDING"
    WRONG_SIDE_DRIVING = "WRONG_SIDE_DRIVING"
    SIGNAL_BREAKING = "SIGNAL_BREAKING"
    NO_HELMET = "NO_HELMET"
    ILLEGAL_PARKING = "ILLEGAL_PARKING"
    DRUNK_DRIVING = "DRUNK_DRIVING"
    DRIVING_WITHOUT_LICENSE = "DRIVING_WITHOUT_LICENSE"
    OVERLOADING = "OVERLOADING"
    PHONE_USAGE_WHILE_DRIVING = "PHONE_USAGE_WHILE_DRIVING"
    OTHER = "OTHER"


class RewardTransactionType(str, enum.Enum):
    REWARD = "REWARD"
    PENALTY = "PENALTY"
    BONUS = "BONUS"
    DEDUCTION = "DEDUCTION"
    DEBT_PAYMENT = "DEBT_PAYMENT"


class RewardSource(str, enum.Enum):
    CITIZEN_REPORT = "CITIZEN_REPORT"
    VIOLATION = "VIOLATION"
    FINE_PAYMENT = "FINE_PAYMENT"
    DEBT_PAYMENT = "DEBT_PAYMENT"
    SYSTEM = "SYSTEM"


class TransactionStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class WithdrawalMethod(str, enum.Enum):
    BANK_TRANSFER = "BANK_TRANSFER"
    MOBILE_BANKING = "MOBILE_BANKING"
    CASH = "CASH"


class WithdrawalStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


class DebtStatus(str, enum.Enum):
    OUTSTANDING = "OUTSTANDING"
    PAID = "PAID"
    WAIVED = "WAIVED"
    PARTIAL = "PARTIAL"


# Display copy only; the backend computes the actual amounts.
REVIEW_REWARD_PERCENT = 5.0
FALSE_REPORT_PENALTY_PERCENT = 5.0
REJECTED_APPEAL_PENALTY_PERCENT = 1.5
DEBT_LATE_FEE_PERCENT_PER_WEEK = 2.5

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 20
