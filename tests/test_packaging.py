import re
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def test_pyproject_readme_points_at_existing_file():
    text = (PROJECT_ROOT / "pyproject.toml").read_text()
    match = re.search(r'^readme\s*=\s*"([^"]+)"', text, re.MULTILINE)
    if match is None:
        return
    readme = PROJECT_ROOT / match.group(1)
    assert readme.is_file()
    assert readme.name != "DESIGN.md"
