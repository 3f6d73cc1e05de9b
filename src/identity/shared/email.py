"""EmailAddress value object and the structural check behind it."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "\\")


def is_valid_email(address) -> bool:
    """Structural check: one @, non-empty local and domain parts, a dotted domain.

    Rejects whitespace, consecutive dots, leading/trailing dots or hyphens and
    the usual forbidden punctuation. Bracketed IP literals are accepted as the
    domain part.
    """
    if not isinstance(address, str) or not address:
        return False
    if any(ch.isspace() for ch in address) or address.count("@") != 1:
        return False

    local_part, domain_part = address.split("@", 1)
    if not local_part or not domain_part:
        return False
    if local_part[0] == "." or local_part[-1] == "." or ".." in local_part:
        return False
    if any(ch in address for ch in _FORBIDDEN):
        return False

    if domain_part.startswith("[") and domain_part.endswith("]"):
        return True
    if "[" in domain_part or "]" in domain_part:
        return False

    labels = domain_part.split(".")
    if len(labels) < 2:
        return False
    return all(label and label[0] != "-" and label[-1] != "-" for label in labels)


@identity.value_object
class EmailAddress:
    """A validated email address.

    Used at signup and customer creation so that neither identities nor
    customers are ever stored with an empty or malformed email.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        if not is_valid_email(self.address):
            raise ValidationError({"address": [f"Invalid email address: {self.address!r}"]})
