"""
Script to export Zendesk macros, optionally with a preview against a ticket.

All macros are listed through the paginated macros endpoint. With
--preview-ticket, each macro is applied (read-only) to the given ticket in
parallel, and the resulting status, tags and comment visibility are added to
the export.
"""

import sys
import argparse
import time
import asyncio
from typing import Dict, List, Any, Optional

import aiohttp
import pandas as pd
import requests

from zendesk_client.client import Client
from zendesk_client.logging_setup import setup_logging
from zendesk_client.macros import MacroListOptions, parse_apply_result
from zendesk_client.models import Macro, Ticket
from zendesk_client.monitoring import (
    timed_api_call,
    track_api_call,
    print_api_usage_report,
    reset_api_tracking,
)


# Maximum number of concurrent preview requests
MAX_CONCURRENT_REQUESTS = 5


@timed_api_call("authentication")
def test_authentication(client: Client) -> bool:
    """
    Test authentication with Zendesk API.

    Returns:
        bool: True if authentication is successful, False otherwise
    """
    print("Testing Zendesk API authentication...")

    is_valid, error = client.auth.validate_credentials()

    if is_valid:
        print("[SUCCESS] Authentication successful!")
        return True

    print(f"[ERROR] Authentication failed: {error}")
    return False


def retrieve_macros(client: Client, opts: MacroListOptions) -> List[Macro]:
    """
    Retrieve every macro matching the options, across all pages.

    Args:
        client: Zendesk client
        opts: List filters

    Returns:
        List[Macro]: The macros, or an empty list if the listing failed
    """
    print("\nRetrieving macros...")

    try:
        macros = client.get_all_macros(opts)
    except (requests.RequestException, ValueError) as e:
        print(f"[ERROR] Failed to retrieve macros: {e}")
        return []

    print(f"[SUCCESS] Retrieved {len(macros)} macros")

    if macros:
        active = sum(1 for macro in macros if macro.active)
        print(f"  - active: {active}")
        print(f"  - inactive: {len(macros) - active}")

    return macros


def format_macro_for_export(macro: Macro, preview: Optional[Ticket] = None) -> Dict[str, Any]:
    """
    Flatten a macro (and its preview, if any) into one CSV row.

    Args:
        macro: Macro to export
        preview: Ticket as it would be after applying the macro

    Returns:
        Dict[str, Any]: Row for export
    """
    row = {
        "id": macro.id,
        "title": macro.title,
        "active": macro.active,
        "position": macro.position,
        "created_at": macro.created_at.isoformat() if macro.created_at else None,
        "updated_at": macro.updated_at.isoformat() if macro.updated_at else None,
        "actions": "; ".join(
            f"{action.field}={','.join(action.value)}" for action in macro.actions
        ),
    }

    if preview is not None:
        comment = preview.comment
        row["preview_status"] = preview.status
        row["preview_tags"] = ", ".join(preview.tags or [])
        row["preview_comment_public"] = comment.public if comment else None
        row["preview_comment"] = (comment.body or "").strip() if comment else ""

    return row


async def fetch_preview_async(
    session: aiohttp.ClientSession,
    client: Client,
    ticket_id: int,
    macro_id: int,
) -> Optional[Ticket]:
    """
    Fetch the ticket as it would be after applying one macro.

    Args:
        session: aiohttp session carrying the auth header
        client: Zendesk client (for base URL)
        ticket_id: Ticket to preview against
        macro_id: Macro to apply

    Returns:
        Optional[Ticket]: The previewed ticket, or None on failure
    """
    url = f"{client.base_url}/tickets/{ticket_id}/macros/{macro_id}/apply"
    start_time = time.perf_counter()

    try:
        async with session.get(url) as response:
            if response.status != 200:
                print(f"[ERROR] Failed to preview macro {macro_id}: {response.status}")
                return None
            data = await response.json()
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        print(f"[ERROR] Error previewing macro {macro_id}: {e}")
        return None
    finally:
        track_api_call("macro_apply", time.perf_counter() - start_time)

    try:
        return parse_apply_result(data)
    except ValueError as e:
        print(f"[WARNING] Could not decode preview for macro {macro_id}: {e}")
        return None


async def preview_macros_in_parallel(
    client: Client,
    macros: List[Macro],
    ticket_id: int,
) -> Dict[int, Optional[Ticket]]:
    """
    Preview every macro against a ticket using asyncio.

    Args:
        client: Zendesk client (for base URL and credentials)
        macros: Macros to preview
        ticket_id: Ticket to preview against

    Returns:
        Dict[int, Optional[Ticket]]: Preview per macro id
    """
    macro_ids = [macro.id for macro in macros if macro.id is not None]
    previews: Dict[int, Optional[Ticket]] = {}

    if not macro_ids:
        return previews

    headers = {
        "Authorization": client.auth.get_auth_header(),
        "Accept": "application/json",
    }
    timeout = aiohttp.ClientTimeout(total=client.timeout)

    async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
        # Chunks bound the number of requests in flight
        for i in range(0, len(macro_ids), MAX_CONCURRENT_REQUESTS):
            chunk = macro_ids[i:i + MAX_CONCURRENT_REQUESTS]
            results = await asyncio.gather(
                *(fetch_preview_async(session, client, ticket_id, macro_id) for macro_id in chunk)
            )
            previews.update(zip(chunk, results))

            print(f"Previewed {len(previews)}/{len(macro_ids)} macros")

    return previews


def export_macros_to_csv(rows: List[Dict[str, Any]], filename: str) -> None:
    """
    Export macro rows to a CSV file.

    Args:
        rows: Rows from format_macro_for_export
        filename: Output CSV path
    """
    if not rows:
        print("No macros to export.")
        return

    print("\nCreating CSV export...")
    df = pd.DataFrame(rows)

    # utf-8-sig so spreadsheet tools detect the encoding
    df.to_csv(filename, index=False, encoding="utf-8-sig")
    print(f"[SUCCESS] Exported {len(rows)} macros to {filename}")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Export Zendesk macros to CSV")
    parser.add_argument(
        "--status",
        type=str,
        choices=["all", "active", "inactive"],
        default="all",
        help="Which macros to export",
    )
    parser.add_argument(
        "--sort-by",
        type=str,
        choices=["alphabetical", "created_at", "updated_at", "usage_1h", "usage_24h", "usage_7d", "usage_30d"],
        default=None,
        help="Sort order of the listing",
    )
    parser.add_argument(
        "--preview-ticket",
        type=int,
        default=None,
        help="Ticket ID to preview every macro against (read-only)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="zendesk_macros.csv",
        help="Output CSV filename",
    )
    parser.add_argument(
        "--skip-report",
        action="store_true",
        help="Skip the API usage report at the end",
    )
    return parser.parse_args(argv)


def build_list_options(args: argparse.Namespace) -> MacroListOptions:
    active = {"all": None, "active": True, "inactive": False}[args.status]
    return MacroListOptions(active=active, sort_by=args.sort_by, per_page=100)


async def run_async_export(args: argparse.Namespace) -> int:
    """
    Main async function to run the export process.

    Returns:
        int: Process exit code
    """
    reset_api_tracking()
    start_time = time.time()

    print("=" * 60)
    print("ZENDESK MACRO EXPORT")
    print("=" * 60)

    with Client.from_settings() as client:
        if not test_authentication(client):
            print("Exiting due to authentication failure.")
            return 1

        macros = retrieve_macros(client, build_list_options(args))

        previews: Dict[int, Optional[Ticket]] = {}
        if macros and args.preview_ticket is not None:
            print(f"\nPreviewing {len(macros)} macros against ticket {args.preview_ticket}...")
            previews = await preview_macros_in_parallel(client, macros, args.preview_ticket)

        rows = [format_macro_for_export(macro, previews.get(macro.id)) for macro in macros]
        export_macros_to_csv(rows, args.output)

    if not args.skip_report:
        print_api_usage_report()

    total_time = time.time() - start_time
    print(f"\nTotal script execution time: {total_time:.2f} seconds")
    print("\nExport process completed!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the Zendesk macro export script."""
    setup_logging()
    args = parse_arguments(argv)
    return asyncio.run(run_async_export(args))


if __name__ == "__main__":
    sys.exit(main())
