"""
Exception classes for the application
"""


class ServiceError(Exception):
    """
    Base exception for all service-related errors
    """
    status_code = 500

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code or "SERVICE_ERROR"

    def to_dict(self):
        """Convert exception to dictionary for JSON responses"""
        return {
            'error': self.code,
            'message': self.message
        }


class ValidationError(ServiceError):
    """
    Raised when input validation fails
    """
    status_code = 400

    def __init__(self, message: str, field: str = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field

    def to_dict(self):
        result = super().to_dict()
        if self.field:
            result['field'] = self.field
        return result


class NotFoundError(ServiceError):
    """
    Raised when requested resource is not found
    """
    status_code = 404

    def __init__(self, resource: str, id: str = None):
        message = f"{resource} not found"
        if id:
            message = f"{resource} with ID {id} not found"
        super().__init__(message, "NOT_FOUND")
        self.resource = resource
        self.id = id


class ConfigurationError(ServiceError):
    """
    Raised when configuration (e.g. a third-place rule file) is invalid
    """
    def __init__(self, message: str, config_key: str = None):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key

    def to_dict(self):
        result = super().to_dict()
        if self.config_key:
            result['config_key'] = self.config_key
        return result
