"""
Exception classes for GAEKit
"""

from typing import Optional, Dict, Any


class GAEKitError(Exception):
    """Base exception for all GAEKit errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(GAEKitError):
    """Exception raised for invalid requests, URLs or methods"""
    pass


class SigningError(GAEKitError):
    """Exception raised when an OAuth signature cannot be produced"""
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"


class UnsupportedSignatureMethodError(SigningError):
    """Exception raised for signature methods other than HMAC-SHA1 and PLAINTEXT"""
    
    def __init__(self, method: Any):
        super().__init__(
            f"Unsupported signature method: {method}",
            "UNSUPPORTED_SIGNATURE_METHOD",
            {"signature_method": str(method)}
        )
        self.method = method


class MalformedParameterPairError(ValidationError):
    """Exception raised for a query or body pair without '=' in strict parsing"""
    
    def __init__(self, pair: str):
        super().__init__(
            f"Malformed parameter pair: {pair!r}",
            "MALFORMED_PARAMETER_PAIR",
            {"pair": pair}
        )
        self.pair = pair


class ConfigError(GAEKitError):
    """Exception raised for configuration loading and validation errors"""
    pass
