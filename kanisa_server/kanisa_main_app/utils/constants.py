"""Centralized constants and business rules"""

class UserRole:
    CUSTOMER = 'customer'
    DRIVER = 'driver'
    ADMIN = 'admin'
    SUPER_ADMIN = 'super_admin'

    CHOICES = [
        (CUSTOMER, 'Customer'),
        (DRIVER, 'Driver'),
        (ADMIN, 'Admin'),
        (SUPER_ADMIN, 'Super Admin'),
    ]

class AccountStatus:
    PENDING = 'pending'
    ACTIVE = 'active'
    SUSPENDED = 'suspended'
    INACTIVE = 'inactive'

    CHOICES = [
        (PENDING, 'Pending'),
        (ACTIVE, 'Active'),
        (SUSPENDED, 'Suspended'),
        (INACTIVE, 'Inactive'),
    ]

class PreferredLanguage:
    ENGLISH = 'EN'
    SWAHILI = 'SW'

    CHOICES = [
        (ENGLISH, 'English'),
        (SWAHILI, 'Swahili'),
    ]

class OtpPurpose:
    REGISTRATION = 'registration'
    PASSWORD_RESET = 'password-reset'
    LOGIN = 'login'

    CHOICES = [
        (REGISTRATION, 'Registration'),
        (PASSWORD_RESET, 'Password Reset'),
        (LOGIN, 'Login'),
    ]

    LABELS = dict(CHOICES)

class DocumentType:
    NATIONAL_ID = 'NATIONAL_ID'
    DRIVERS_LICENSE = 'DRIVERS_LICENSE'
    VEHICLE_PAPERS = 'VEHICLE_PAPERS'
    LOCAL_GOV_LETTER = 'LOCAL_GOV_LETTER'
    BUSINESS_LICENSE = 'BUSINESS_LICENSE'
    BUSINESS_REGISTRATION = 'BUSINESS_REGISTRATION'

    CHOICES = [
        (NATIONAL_ID, 'National ID'),
        (DRIVERS_LICENSE, "Driver's License"),
        (VEHICLE_PAPERS, 'Vehicle Papers'),
        (LOCAL_GOV_LETTER, 'Local Government Letter'),
        (BUSINESS_LICENSE, 'Business License'),
        (BUSINESS_REGISTRATION, 'Business Registration'),
    ]

class VerificationStatus:
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'

    CHOICES = [
        (PENDING, 'Pending Review'),
        (APPROVED, 'Approved'),
        (REJECTED, 'Rejected'),
    ]

class RegistrationSteps:
    """Ordered onboarding stages, keyed by step number"""
    FIRST = 1
    LAST = 5

    TITLES = {
        1: {
            'title': 'Basic Information',
            'description': 'Create account with email/phone and password',
        },
        2: {
            'title': 'OTP Verification',
            'description': 'Verify your email or phone number',
        },
        3: {
            'title': 'Personal Details',
            'description': 'Add date of birth, TIN, and NIDA number',
        },
        4: {
            'title': 'Business Profile',
            'description': 'Add business information and upload documents',
        },
        5: {
            'title': 'Address Details',
            'description': 'Complete registration with address information',
        },
    }

class BusinessRules:
    """Business rules and limits"""
    OTP_LENGTH = 6
    OTP_EXPIRY_MINUTES = 10
    MIN_AGE_YEARS = 18
    MIN_PASSWORD_LENGTH = 8
    MAX_DOCUMENT_SIZE = 5 * 1024 * 1024
    MAX_DOCUMENTS = 10
    ALLOWED_DOCUMENT_MIME_TYPES = ['image/jpeg', 'image/png', 'application/pdf']

class PaymentStatus:
    PENDING = 'PENDING'
    COMPLETED = 'COMPLETED'
    FAILED = 'FAILED'
    CANCELLED = 'CANCELLED'

    CHOICES = [
        (PENDING, 'Pending'),
        (COMPLETED, 'Completed'),
        (FAILED, 'Failed'),
        (CANCELLED, 'Cancelled'),
    ]

    TERMINAL = [COMPLETED, FAILED, CANCELLED]

class PaymentChannel:
    MPESA = 'MPESA-TZ'
    TIGO = 'TIGO-TZ'
    AIRTEL = 'AIRTEL-TZ'

    CHOICES = [
        (MPESA, 'M-Pesa'),
        (TIGO, 'Tigo Pesa'),
        (AIRTEL, 'Airtel Money'),
    ]
