from __future__ import annotations

from io import StringIO
from typing import Any

from ruamel.yaml import YAML


def _get_yaml() -> YAML:
    yaml = YAML(typ="rt")
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.preserve_quotes = True
    yaml.width = 4096  # don't fold long lines
    yaml.default_flow_style = False

    return yaml


yaml = _get_yaml()


def dumps(data: Any) -> str:
    buf = StringIO()
    yaml.dump(data, buf)
    return buf.getvalue()
