"""Writers for WordprocessingML parts and DOCX packages."""

from .xml_exporter import XMLExporter
from .docx_exporter import DOCXExporter, new_package_parts

__all__ = [
    "XMLExporter",
    "DOCXExporter",
    "new_package_parts",
]
