"""Public names of amfexamples, imported on first use to keep the CLI startup short."""

import importlib

_mappings = {
    "ApiExampleGenerator": "amfexamples.examplegen",
    "generate_examples_file": "amfexamples.examplegen",
    "list_media_file": "amfexamples.examplegen",
    "format_xml": "amfexamples.xmltree",
    "AmfModel": "amfexamples.amfmodel",
    "GenerationOptions": "amfexamples.models",
    "ExampleModel": "amfexamples.models",
}


def __getattr__(name):
    if name not in _mappings:
        raise AttributeError(f"module 'amfexamples' has no attribute {name!r}")
    return getattr(importlib.import_module(_mappings[name]), name)
