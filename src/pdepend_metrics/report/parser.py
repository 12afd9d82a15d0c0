"""Parse PDepend ``--summary-xml`` output into typed nodes."""

from __future__ import annotations

from typing import Union
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from ..exceptions import MalformedReport, MissingRootNode
from ..logging_config import get_logger
from .nodes import ClassNode, MethodNode, MetricsNode, PackageNode, Report

logger = get_logger(__name__)

ROOT_TAG = "metrics"


def parse_report(raw: Union[str, bytes]) -> Report:
    """Parse summary XML.

    Raises:
        MalformedReport: If ``raw`` is not well-formed XML.
        MissingRootNode: If the document has no ``<metrics>`` element.
    """
    if not raw or not raw.strip():
        raise MalformedReport("report is empty")

    try:
        document = ET.fromstring(raw)
    except ET.ParseError as e:
        line = e.position[0] if getattr(e, "position", None) else None
        raise MalformedReport(str(e), line=line) from e
    except DefusedXmlException as e:
        raise MalformedReport(str(e)) from e

    root = document if document.tag == ROOT_TAG else document.find(f".//{ROOT_TAG}")
    if root is None:
        raise MissingRootNode(ROOT_TAG, document.tag)

    metrics = MetricsNode(attributes=dict(root.attrib))
    # Packages may sit anywhere below the document, like //package.
    for package_el in document.iter("package"):
        metrics.packages.append(_package(package_el))

    logger.debug(
        "Parsed report with %d packages, %d classes",
        len(metrics.packages),
        sum(len(p.classes) for p in metrics.packages),
    )
    return Report(metrics=metrics)


def _package(element: Element) -> PackageNode:
    package = PackageNode(attributes=dict(element.attrib))
    for class_el in element.findall("class"):
        package.classes.append(_class(class_el))
    return package


def _class(element: Element) -> ClassNode:
    file_el = element.find("file")
    cls = ClassNode(
        attributes=dict(element.attrib),
        file=file_el.get("name") if file_el is not None else None,
    )
    for method_el in element.findall("method"):
        cls.methods.append(MethodNode(attributes=dict(method_el.attrib)))
    return cls
