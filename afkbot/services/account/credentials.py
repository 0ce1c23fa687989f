"""Accounts file reader and parser.

One account per line in ``email:password`` form. Blank lines and lines
starting with ``#`` are ignored, and lines without a ``:`` are dropped.
"""

from pathlib import Path
from typing import List, Union

from loguru import logger

from ...constants import AccountsFile
from ...core.exceptions import FileAccessError
from ..octant.models import Credential

PathLike = Union[str, Path]


def parse_accounts(content: str) -> List[Credential]:
    """
    Parse accounts from file content.

    Only the first two ``:``-separated fields are used, so a password that
    itself contains ``:`` is cut at that point.

    Args:
        content: Content of the accounts file

    Returns:
        Credentials in file order
    """
    accounts: List[Credential] = []

    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith(AccountsFile.COMMENT_PREFIX):
            continue

        parts = stripped.split(AccountsFile.DELIMITER)
        if len(parts) < 2:
            continue

        accounts.append(Credential(email=parts[0].strip(), password=parts[1].strip()))

    return accounts


def read_accounts_file(path: PathLike) -> str:
    """
    Read the accounts file.

    Raises:
        FileAccessError: If the file is missing or unreadable
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(path), f"Failed to read {path}: {e}") from e


def write_accounts_template(path: PathLike) -> None:
    """
    Write a sample accounts file for the user to fill in.

    Raises:
        FileAccessError: If the file cannot be written
    """
    try:
        Path(path).write_text(AccountsFile.TEMPLATE, encoding="utf-8")
    except OSError as e:
        raise FileAccessError(str(path), f"Failed to create sample {path}: {e}") from e
    logger.debug(f"Wrote accounts template to {path}")


def load_accounts(path: PathLike) -> List[Credential]:
    """Read and parse the accounts file."""
    return parse_accounts(read_accounts_file(path))
