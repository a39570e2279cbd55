#!/usr/bin/env python3
"""
Convert legacy string addresses to structured ones across all users.

Reads are repaired lazily by the API; this walks every user once so the
table ends up consistent without waiting for each account to log in.

Usage:
    python repair_addresses.py              # Repair and save
    python repair_addresses.py --dry-run    # Report what would change
"""

import argparse
from dataclasses import dataclass, field

from rich.console import Console
from rich.table import Table

from api.dependencies import ServiceContainer
from modules.users.address import AddressNormalizer, normalize_address
from shared.logging import configure_logging

console = Console()

PAGE_SIZE = 100


@dataclass
class RepairReport:
    scanned: int = 0
    repaired: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)


def repair_all(users, dry_run: bool = False, page_size: int = PAGE_SIZE) -> RepairReport:
    """
    Page through all users and repair legacy addresses.

    Args:
        users: A UserRepository (or anything with list_users/update).
        dry_run: Only count what would be repaired.
    """
    normalizer = AddressNormalizer(users)
    report = RepairReport()
    offset = 0

    while True:
        page, total = users.list_users(offset=offset, limit=page_size)
        for user in page:
            report.scanned += 1
            if not user.has_legacy_address:
                continue

            if dry_run:
                result = normalize_address(user.address)
                if result.changed:
                    report.repaired += 1
                else:
                    report.failures.append((user.id, result.error or "unparseable"))
                continue

            if normalizer.normalize(user).has_legacy_address:
                report.failures.append((user.id, "not repaired"))
            else:
                report.repaired += 1

        offset += page_size
        if not page or offset >= total:
            break

    return report


def main():
    parser = argparse.ArgumentParser(description="Repair legacy string addresses")
    parser.add_argument("--dry-run", action="store_true", help="Report without saving")
    args = parser.parse_args()

    configure_logging()
    console.print("[bold]Garden Address Repair[/bold]")

    report = repair_all(ServiceContainer().user_repository, dry_run=args.dry_run)

    verb = "Would repair" if args.dry_run else "Repaired"
    console.print(f"Scanned {report.scanned} user(s). {verb} {report.repaired}.")

    if report.failures:
        table = Table(title="Not repaired")
        table.add_column("User", style="cyan")
        table.add_column("Reason", style="yellow")
        for user_id, reason in report.failures:
            table.add_row(user_id, reason)
        console.print(table)


if __name__ == "__main__":
    main()
