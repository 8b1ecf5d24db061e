import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from webmonitor.rules.models import Rules

API_URL_ENV = "WEBMONITOR_API_URL"


def load_rules(path: Path, env: dict[str, str] | None = None) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.

    WEBMONITOR_API_URL, when set, overrides api.base_url.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    # Accept a ```yaml fenced block (rules kept inside markdown docs)
    lines = content.splitlines()
    yaml_lines = []
    in_block = False
    found_block = False

    for line in lines:
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    clean_content = "\n".join(yaml_lines) if found_block else content

    try:
        data = yaml.safe_load(clean_content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Rules file must contain a mapping at the top level")

    environ = os.environ if env is None else env
    api_url = environ.get(API_URL_ENV)
    if api_url:
        data.setdefault("api", {})
        data["api"]["base_url"] = api_url

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
