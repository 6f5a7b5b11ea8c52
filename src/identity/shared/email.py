"""Validation for email addresses."""


def validate_email_address(email: str) -> str:
    """Check that ``email`` follows a basic valid structure and return it lower-cased.

    Enforces structural validity: exactly one @, valid local and domain parts,
    no consecutive dots, no forbidden characters.
    """
    email = email.strip()

    if not email or len(email) > 254:
        raise ValueError(f"Invalid email address: {email!r}")

    if " " in email or "\t" in email or "\n" in email:
        raise ValueError(f"Invalid email address: {email!r}")

    if email.count("@") != 1:
        raise ValueError(f"Invalid email address: {email!r}")

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        raise ValueError(f"Invalid email address: {email!r}")

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        raise ValueError(f"Invalid email address: {email!r}")

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            raise ValueError(f"Invalid email address: {email!r}")

    if "." not in domain_part:
        raise ValueError(f"Invalid email address: {email!r}")

    if ".." in local_part or ".." in domain_part:
        raise ValueError(f"Invalid email address: {email!r}")

    for forbidden in (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\"):
        if forbidden in email:
            raise ValueError(f"Invalid email address: {email!r}")

    return email.lower()
