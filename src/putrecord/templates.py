"""
Project templates written by ``putrecord init``.

Keep WORKFLOW_TEMPLATE and ENV_EXAMPLE_TEMPLATE in sync with the example
files at the repository root (workflow.yaml, .env.example).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


WORKFLOW_DIR = Path(".github") / "workflows"
WORKFLOW_PATH = WORKFLOW_DIR / "putrecord.yaml"
ENV_EXAMPLE_PATH = Path(".env.example")

WORKFLOW_TEMPLATE = """\
# Example GitHub Actions workflow for automatic PDS uploads
# Copy this file to .github/workflows/ in your repository to use it
name: Upload to PDS

on:
  push:
    branches:
      - main
  workflow_dispatch:

jobs:
  upload:
    runs-on: ubuntu-latest
    steps:
      - name: Checkout code
        uses: actions/checkout@v4

      - name: Setup Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install putrecord
        run: pip install putrecord

      - name: Upload to PDS
        env:
          PDS_URL: ${{ secrets.PDS_URL }}
          IDENTIFIER: ${{ secrets.IDENTIFIER }}
          APP_PASSWORD: ${{ secrets.APP_PASSWORD }}
          COLLECTION: ${{ secrets.COLLECTION }}
          RKEY: ${{ secrets.RKEY }}
          FILE_PATH: ${{ secrets.FILE_PATH }}
        run: putrecord --quiet
"""

ENV_EXAMPLE_TEMPLATE = """\
# PDS Configuration
PDS_URL=https://bsky.social

# Authentication
IDENTIFIER=your-handle.bsky.social
APP_PASSWORD=your-app-password-here

# Record Configuration
# Use any valid AT Protocol collection (NSID format)
COLLECTION=com.example.note

# RKEY (optional)
# - Omit or comment out for CREATE mode (first upload)
# - Set for UPDATE mode (subsequent uploads)
# RKEY=your-generated-rkey-here

# File Path
# Can be text, JSON, or any content supported by your collection
FILE_PATH=./content/note.txt

# FORCE_FIELDS (optional)
# Set to true to re-extract title and reset visibility on WhiteWind updates
# FORCE_FIELDS=true
"""


@dataclass
class InitAction:
    """
    Outcome of writing one template file.

    Attributes:
        path: Path relative to the project directory
        status: "created", "overwritten" or "skipped"
    """

    path: Path
    status: str

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"


@dataclass
class InitResult:
    """Result of initializing a project directory."""

    directory: Path
    created_workflow_dir: bool
    actions: list[InitAction]

    @property
    def any_skipped(self) -> bool:
        """Check if any file was left untouched because it existed."""
        return any(action.skipped for action in self.actions)


def _write_template(base: Path, relative: Path, content: str, force: bool) -> InitAction:
    target = base / relative
    existed = target.exists()

    if existed and not force:
        logger.info(f"Skipping existing file: {target}")
        return InitAction(path=relative, status="skipped")

    target.write_text(content, encoding="utf-8")
    logger.info(f"Wrote template: {target}")
    return InitAction(path=relative, status="overwritten" if existed else "created")


def init_project(directory: Union[str, Path] = ".", force: bool = False) -> InitResult:
    """
    Write the GitHub Actions workflow and .env.example into a directory.

    Args:
        directory: Project root to initialize
        force: Overwrite files that already exist

    Returns:
        InitResult listing what was written or skipped
    """
    base = Path(directory)
    workflow_dir = base / WORKFLOW_DIR
    created_dir = not workflow_dir.exists()
    workflow_dir.mkdir(parents=True, exist_ok=True)

    actions = [
        _write_template(base, WORKFLOW_PATH, WORKFLOW_TEMPLATE, force),
        _write_template(base, ENV_EXAMPLE_PATH, ENV_EXAMPLE_TEMPLATE, force),
    ]
    return InitResult(directory=base, created_workflow_dir=created_dir, actions=actions)
