"""Account credential loading."""

from .credentials import (
    load_accounts,
    parse_accounts,
    read_accounts_file,
    write_accounts_template,
)

__all__ = ["load_accounts", "parse_accounts", "read_accounts_file", "write_accounts_template"]
