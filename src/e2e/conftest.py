import json
from pathlib import Path

import pytest

CATALOG = {
    "elements": {
        "root": [
            {"label": "child", "description": "A child node", "relevance_score": 0},
            {"label": "childList"},
            {"label": "description"},
        ],
        "*": [{"label": "root", "required": True}],
    },
    "attributes": {
        "child": [
            {"label": "id", "required": True, "data_type": "xs:ID", "description": "Unique identifier"},
            {"label": "name", "data_type": "xs:string"},
        ],
    },
    "values": {
        "child@type": [{"label": "simple"}, {"label": "complex"}],
        "*": [{"label": "true"}, {"label": "false"}],
    },
    "text": {"*": [{"label": "TODO", "type": "snippet"}]},
    "namespaces": {"*": [{"label": "http://www.w3.org/2001/XMLSchema"}]},
    "templates": {"*": [{"label": "xsl:template", "insert_text": "<xsl:template match=\"\"/>"}]},
}


@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return path
