"""GitHub Actions output helpers.

Used when ``analyze`` runs inside a workflow: counts go to GITHUB_OUTPUT for
later steps and the Markdown report goes to the job summary.
"""

from __future__ import annotations

import os

OUTPUT_DELIMITER = "DIFFSAGE_EOF"


def write_github_outputs(outputs: dict[str, str]) -> bool:
    """Append key-value pairs to GITHUB_OUTPUT.

    Multiline values use the heredoc form.

    Args:
        outputs: Output names mapped to their values

    Returns:
        True if written, False if GITHUB_OUTPUT is not set
    """
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        print(f"GITHUB_OUTPUT not set, skipping outputs: {', '.join(outputs)}")
        return False
    with open(output_file, "a", encoding="utf-8") as f:
        for key, value in outputs.items():
            if "\n" in value:
                f.write(f"{key}<<{OUTPUT_DELIMITER}\n{value}\n{OUTPUT_DELIMITER}\n")
            else:
                f.write(f"{key}={value}\n")
    return True


def write_github_step_summary(content: str) -> bool:
    """Append Markdown to GITHUB_STEP_SUMMARY.

    Returns:
        True if written successfully, False otherwise
    """
    summary_path = os.environ.get("GITHUB_STEP_SUMMARY")
    if not summary_path:
        print("GITHUB_STEP_SUMMARY not set, skipping job summary")
        return False
    try:
        with open(summary_path, "a", encoding="utf-8") as f:
            f.write(content)
            if not content.endswith("\n"):
                f.write("\n")
        return True
    except OSError as e:
        print(f"  Error: failed to write job summary: {e}")
        return False
