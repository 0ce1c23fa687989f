"""Accounts file constants."""

from typing import Final


class AccountsFile:
    """Credential file format."""

    DEFAULT_PATH: Final[str] = "accounts.txt"
    COMMENT_PREFIX: Final[str] = "#"
    DELIMITER: Final[str] = ":"
    TEMPLATE: Final[str] = (
        "# Format: email:password\n" "myemail@gmail.com:pass1234\n" "# Add more accounts below"
    )
