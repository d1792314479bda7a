"""
Pytest Configuration for MODGEN Tests

Ensures proper import paths for the modgen package and provides a throwaway
project layout for generation tests.
"""

import sys
from pathlib import Path

import pytest

# Add the parent directory to sys.path to ensure proper imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


REGISTRY_TEMPLATE = """import { Provider } from '@nestjs/common';

export const resourceProviders = [];
"""

SAMPLE_MODELS = [
    {
        "master": [
            {
                "tm_barang": {
                    "kode_barcode": "string",
                    "nama_barang": "string",
                    "kode_group": "string",
                    "harga_satuan": "number",
                    "stok?": "number",
                },
            },
            {
                "tm_kode_group": {
                    "kode_group": "string",
                    "nama_group": "string",
                },
            },
        ],
    },
    {
        "transaction": [
            {
                "tt_jual": {
                    "kode_barcode": "string",
                    "no_faktur_jual": "string",
                    "harga": "number",
                },
            },
        ],
    },
]


@pytest.fixture
def project(tmp_path):
    """Project root with an empty resource provider file."""
    registry = tmp_path / "src" / "module" / "resource.provider.ts"
    registry.parent.mkdir(parents=True)
    registry.write_text(REGISTRY_TEMPLATE, encoding="utf-8")
    return tmp_path


@pytest.fixture
def sample_models():
    return SAMPLE_MODELS
