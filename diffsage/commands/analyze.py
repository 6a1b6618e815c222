"""Analyze command - classify the changes between two versions of a text.

Reads both versions from the chosen source, runs the analyzer and prints the
report. Optionally writes artifacts and GitHub Actions outputs.

Artifact outputs (in --output-dir):
    changes.json   - Categorized changes (machine-readable)
    changes.md     - Categorized changes (human-readable)
"""

from __future__ import annotations

from pathlib import Path

from diffsage.domain.settings import AnalyzerSettings, SettingsError
from diffsage.domain.text_source import TextSource, TextSourceError
from diffsage.infrastructure.github.output import write_github_outputs, write_github_step_summary
from diffsage.infrastructure.text_provider.factory import create_text_provider
from diffsage.services.diff_analyzer import DiffAnalyzer
from diffsage.services.report_generator import ReportFormat, ReportGenerator

CHANGES_JSON_FILENAME = "changes.json"
CHANGES_MD_FILENAME = "changes.md"


def cmd_analyze(
    source_locator: str,
    changed_locator: str,
    source: TextSource = TextSource.FILE,
    repo: str | None = None,
    repo_path: str = ".",
    report_format: ReportFormat = ReportFormat.TEXT,
    output_dir: Path | None = None,
    config_path: str | None = None,
    write_job_summary: bool = False,
) -> int:
    """Execute the analyze command.

    Args:
        source_locator: Path (or REV:path) of the original text
        changed_locator: Path (or REV:path) of the changed text
        source: Where both texts are read from
        repo: GitHub repository in owner/name format (GITHUB source)
        repo_path: Path to local git repo (GIT source)
        report_format: Format printed to stdout
        output_dir: Directory for changes.json and changes.md, if given
        config_path: YAML file with analyzer settings, if given
        write_job_summary: Append the report to the GitHub Actions job summary

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    # --------------------------------------------------------
    # 1. Load settings and texts
    # --------------------------------------------------------
    try:
        settings = AnalyzerSettings.from_file(config_path) if config_path else AnalyzerSettings()
    except SettingsError as e:
        print(f"  Error: {e}")
        return 1

    try:
        provider = create_text_provider(source, repo=repo, repo_path=repo_path)
        source_text = provider.read(source_locator)
        changed_text = provider.read(changed_locator)
    except (TextSourceError, ValueError) as e:
        print(f"  Error: {e}")
        return 1

    # --------------------------------------------------------
    # 2. Analyze
    # --------------------------------------------------------
    if report_format != ReportFormat.JSON:
        print(f"Analyzing {source_locator} -> {changed_locator} ({source.value})...")
    changes = DiffAnalyzer(settings).analyze(source_text, changed_text)

    generator = ReportGenerator(source_label=source_locator, changed_label=changed_locator)
    print(generator.render(changes, report_format))

    # --------------------------------------------------------
    # 3. Artifacts and workflow outputs
    # --------------------------------------------------------
    markdown = generator.to_markdown(changes)

    if output_dir is not None:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            json_path = output_dir / CHANGES_JSON_FILENAME
            json_path.write_text(generator.to_json(changes), encoding="utf-8")
            md_path = output_dir / CHANGES_MD_FILENAME
            md_path.write_text(markdown, encoding="utf-8")
        except OSError as e:
            print(f"  Error: cannot write artifacts to {output_dir}: {e}")
            return 1
        if report_format != ReportFormat.JSON:
            print(f"  Wrote {json_path}")
            print(f"  Wrote {md_path}")

    if write_job_summary:
        write_github_step_summary(markdown)
        outputs = {"total_changes": str(changes.total)}
        for category, count in changes.counts().items():
            outputs[f"{category.value}_count"] = str(count)
        write_github_outputs(outputs)

    return 0
