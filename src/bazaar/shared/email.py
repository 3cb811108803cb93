"""EmailAddress value object for validated, normalized email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from bazaar.domain import bazaar

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


@bazaar.value_object
class EmailAddress:
    """A structurally valid email address.

    Exactly one ``@``, non-empty local and domain parts, a dotted domain
    without leading/trailing dots or hyphens, no whitespace and no consecutive
    dots. Users are looked up by email, so callers store ``normalized``.
    """

    address: String(required=True, max_length=254, sanitize=False)

    @invariant.post
    def address_must_be_well_formed(self):
        email = self.address

        def fail():
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            fail()

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            fail()
        if not domain_part or "." not in domain_part:
            fail()
        if domain_part.startswith(".") or domain_part.endswith("."):
            fail()
        if ".." in local_part or ".." in domain_part:
            fail()
        if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
            fail()
        if any(ch in email for ch in _FORBIDDEN):
            fail()

    @property
    def normalized(self) -> str:
        return self.address.strip().lower()
