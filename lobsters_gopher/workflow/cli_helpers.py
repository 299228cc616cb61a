"""Console output for the mirror CLI.

Log records go to the configured handler; these helpers print the short
operator-facing summary at the end of a run.
"""

from lobsters_gopher.workflow.state import MirrorRun


def display_run_summary(run: MirrorRun) -> None:
    """Display the outcome of a completed run.

    Example Output:
        ======================================================================
        ✅ MIRROR UPDATED
        ======================================================================

        Source: https://lobste.rs/
        Stories: 25
        Index: written
        Articles: 24 rendered, 1 skipped
          - abc123: HTTP 503 (https://lobste.rs/s/abc123/title.json)
    """
    print("\n" + "=" * 70)
    print("✅ MIRROR UPDATED" if not run.skipped else "⚠️  MIRROR PARTIALLY UPDATED")
    print("=" * 70)

    print(f"\nSource: {run.base_url}")
    print(f"Stories: {run.story_count}")
    print(f"Index: {'written' if run.index_written else 'NOT written'}")
    print(f"Articles: {len(run.rendered)} rendered, {len(run.skipped)} skipped")

    for story_id in run.skipped:
        reason = run.failures.get(story_id, "unknown error")
        # Truncate long error messages
        short_reason = reason[:100] + "..." if len(reason) > 100 else reason
        print(f"  - {story_id}: {short_reason}")

    print("\n" + "=" * 70)


def display_error(message: str) -> None:
    """Display error message in formatted style.

    Args:
        message: Error message to display
    """
    print("\n" + "=" * 70)
    print("❌ ERROR")
    print("=" * 70)
    print(f"\n{message}")
    print("\n" + "=" * 70)
