"""Domain-level commands built by transport adapters."""

from dataclasses import dataclass

from .exceptions import ValidationError

MISSING_FIELDS_MESSAGE = "Please fill all the fields."


@dataclass(slots=True, frozen=True)
class RegisterCommand:
    """Validated inputs required to start a registration."""

    name: str
    email: str
    password: str
    phone_number: str

    @classmethod
    def from_fields(
        cls,
        name: str | None,
        email: str | None,
        password: str | None,
        phone_number: str | None,
    ) -> "RegisterCommand":
        """
        Build a command from raw request fields.

        Raises:
            ValidationError: If any field is missing or blank
        """
        values = (name, email, password, phone_number)
        if any(value is None or not value.strip() for value in values):
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        return cls(
            name=name.strip(),
            email=email.strip(),
            password=password,
            phone_number=phone_number.strip(),
        )
