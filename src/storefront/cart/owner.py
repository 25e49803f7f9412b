"""Cart and order ownership.

A cart belongs either to a registered customer or to an anonymous browsing
session, never both. ``OwnerRef`` makes that choice explicit instead of
inventing a synthetic customer identity for guests.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.value_object
class OwnerRef:
    customer_id = Identifier()
    session_id = String(max_length=255)

    @invariant.post
    def exactly_one_owner(self):
        if bool(self.customer_id) == bool(self.session_id):
            raise ValidationError({"owner": ["Exactly one of customer_id or session_id is required"]})

    @classmethod
    def authenticated(cls, customer_id):
        return cls(customer_id=str(customer_id))

    @classmethod
    def guest(cls, session_id):
        return cls(session_id=session_id)

    @classmethod
    def from_identifiers(cls, customer_id=None, session_id=None):
        return cls(customer_id=customer_id or None, session_id=session_id or None)

    @property
    def is_guest(self) -> bool:
        return self.session_id is not None
