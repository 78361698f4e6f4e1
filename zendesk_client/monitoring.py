"""
Monitoring module for the Zendesk API client.

This module counts and times API calls per endpoint category so that
scripts can report how much load they put on the API.
"""

import time
import datetime
from typing import Dict, Any, List, Callable
import functools

CATEGORIES = (
    "authentication",
    "macros",
    "macro_apply",
    "side_conversations",
    "other",
    "total",
)

# Initialize the API call counters
api_calls: Dict[str, int] = {category: 0 for category in CATEGORIES}

# Store timing information
api_timing: Dict[str, List[float]] = {category: [] for category in CATEGORIES}


def track_api_call(category: str, execution_time: float) -> None:
    """
    Track an API call with its category and execution time.

    Args:
        category: The category of API call (macros, side_conversations, etc.)
        execution_time: The execution time in seconds
    """
    if category not in api_calls or category == "total":
        category = "other"

    api_calls[category] += 1
    api_timing[category].append(execution_time)

    api_calls["total"] += 1
    api_timing["total"].append(execution_time)


def timed_api_call(category: str) -> Callable:
    """
    Decorator to time and track API calls.

    Failed calls are tracked too.

    Args:
        category: The category of API call

    Returns:
        Callable: A decorator function
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                track_api_call(category, time.perf_counter() - start_time)
        return wrapper
    return decorator


def get_api_usage_report() -> Dict[str, Any]:
    """
    Generate a report of API usage.

    Returns:
        Dict[str, Any]: A report with call counts and timing information
    """
    return {
        "calls": dict(api_calls),
        "timing": {
            k: {
                "total": sum(v),
                "average": sum(v) / len(v) if v else 0,
                "min": min(v) if v else 0,
                "max": max(v) if v else 0,
                "count": len(v),
            } for k, v in api_timing.items()
        },
        "timestamp": datetime.datetime.now().isoformat(),
    }


def print_api_usage_report() -> None:
    """Print a formatted API usage report to the console."""
    report = get_api_usage_report()

    print("\n" + "=" * 60)
    print("ZENDESK API USAGE REPORT")
    print("=" * 60)

    print("\nAPI CALLS BY CATEGORY:")
    for category, count in report["calls"].items():
        if category != "total" and count > 0:
            print(f"  - {category.replace('_', ' ').title()}: {count} calls")
    print(f"  TOTAL: {report['calls']['total']} calls")

    print("\nTIMING INFORMATION (seconds):")
    for category, timing in report["timing"].items():
        if category != "total" and timing["count"] > 0:
            print(f"  - {category.replace('_', ' ').title()}:")
            print(f"    * Total: {timing['total']:.2f}s")
            print(f"    * Average: {timing['average']:.4f}s")
            print(f"    * Range: {timing['min']:.4f}s - {timing['max']:.4f}s")

    total = report["timing"]["total"]
    print(f"\nOVERALL API TIME: {total['total']:.2f} seconds")
    print(f"AVERAGE TIME PER API CALL: {total['average']:.4f} seconds")
    print("=" * 60)


def reset_api_tracking() -> None:
    """Reset all API tracking counters and timers."""
    for key in api_calls:
        api_calls[key] = 0

    for key in api_timing:
        api_timing[key] = []
