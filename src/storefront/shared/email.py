"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront


@storefront.value_object
class EmailAddress:
    """A structurally valid email address.

    Used for registered customers and for the contact details captured on
    guest orders.
    """

    address = String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address
        error = ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise error

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise error

        if not domain_part or "." not in domain_part:
            raise error

        if domain_part.startswith(".") or domain_part.endswith("."):
            raise error

        if ".." in local_part or ".." in domain_part:
            raise error

        for label in domain_part.split("."):
            if label.startswith("-") or label.endswith("-"):
                raise error

        for forbidden in (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\"):
            if forbidden in email:
                raise error
