"""Exceptions raised by the registry services."""

from typing import Dict, List


class RegistryError(Exception):
    """Base exception for all registry errors."""

    pass


class RecordValidationError(RegistryError, ValueError):
    """Raised when a record fails validation and was not persisted."""

    def __init__(self, model_name: str, errors: Dict[str, List[str]]):
        """Initialize the exception.

        Args:
            model_name: Name of the model class that failed validation.
            errors: Mapping of field name to its error messages.
        """
        self.model_name = model_name
        self.errors = errors
        super().__init__(f"{model_name} is invalid: {', '.join(self.full_messages())}")

    def full_messages(self) -> List[str]:
        """Human readable messages, e.g. "Api name can't be blank"."""
        messages = []
        for field, field_errors in self.errors.items():
            label = field.replace("_", " ").capitalize()
            messages.extend(f"{label} {message}" for message in field_errors)
        return messages


class RecordNotFoundError(RegistryError, LookupError):
    """Raised when a requested record does not exist."""

    def __init__(self, model_name: str, record_id: int):
        """Initialize the exception.

        Args:
            model_name: Name of the model class that was looked up.
            record_id: The ID that was not found.
        """
        self.model_name = model_name
        self.record_id = record_id
        super().__init__(f"{model_name} {record_id} not found")
