import os
import sys
from collections.abc import Mapping

from webmonitor.rules.models import Rules


def missing_env(rules: Rules, env: Mapping[str, str] | None = None) -> list[str]:
    environ = os.environ if env is None else env
    return [name for name in rules.ops.required_env if name not in environ]


def validate_ops_rules(rules: Rules, env: Mapping[str, str] | None = None) -> None:
    """
    Validate operational requirements before startup.
    Exits the process when required environment variables are missing.
    """
    missing = missing_env(rules, env)
    if missing:
        print(
            f"CRITICAL: Missing required environment variables: {', '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)

    print("Configuration Validated.")
