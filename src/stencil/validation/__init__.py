from stencil.validation.validator import ValidationError, validate, validate_or_raise

__all__ = ["ValidationError", "validate", "validate_or_raise"]
