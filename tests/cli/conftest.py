"""Pytest configuration and fixtures for CLI tests."""

from pathlib import Path

import pytest
from click.testing import CliRunner

LIBRARY_A = """
@Misc{entry1, author = {Test}, title = {cASe}}
@Misc{entry2, author = {test}, title = {casE}}
@Misc{entry3, author = {tESt}, title = {Case}}
@Misc{entry4, author = {tesT}, title = {CASE}}
@Misc{entry5, author = {TEST}, title = {case}}
"""

LIBRARY_B = """
@Misc{entry1, author = {Test}, title = {Case}}
@Misc{entry2, author = {User}, title = {case}}
@Misc{entry3, author = {test}, title = {text}}
@Misc{entry4, author = {Special}, title = {192? title.}}
"""


@pytest.fixture
def library_a_file(tmp_path) -> Path:
    path = tmp_path / "test-library-A.bib"
    path.write_text(LIBRARY_A)
    return path


@pytest.fixture
def library_b_file(tmp_path) -> Path:
    path = tmp_path / "test-library-B.bib"
    path.write_text(LIBRARY_B)
    return path


@pytest.fixture
def cli_runner(tmp_path, monkeypatch):
    """Click CLI test runner with custom invoke method.

    Runs from an empty working directory so no project config is picked up.
    """
    from bibquery.cli.main import cli

    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    class BibQueryCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            if isinstance(args, list):
                return super().invoke(cli, ["--no-color", *args], **kwargs)
            return super().invoke(args, **kwargs)

    return BibQueryCliRunner()
