"""PDepend attribute tables and the metric sink.

Every report attribute consumed is declared ONCE per level as a MetricSpec:
the XML attribute name, the metric suffix stored on the element, and the
numeric type the raw text is coerced to. Metric names are namespaced with
``pdepend.``.

Usage:
    from pdepend_metrics.metrics import CLASS_METRICS, apply_metrics

    apply_metrics(class_element, class_node, CLASS_METRICS)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

from .model import Number

METRIC_PREFIX = "pdepend."


@dataclass(frozen=True)
class MetricSpec:
    """Mapping from one report attribute to one metric.

    Attributes:
        attribute: Attribute name in the summary XML (e.g. ``ccn``).
        name: Metric suffix (e.g. ``cyclomatic_complexity_number``).
        dtype: ``int`` or ``float``.
    """

    attribute: str
    name: str
    dtype: type

    def __post_init__(self) -> None:
        if self.dtype not in (int, float):
            raise ValueError(f"Invalid dtype {self.dtype!r} for {self.attribute}")

    @property
    def metric_name(self) -> str:
        return METRIC_PREFIX + self.name


class AttributeSource(Protocol):
    def value(self, attribute: str, dtype: type) -> Number: ...


class MetricTarget(Protocol):
    def set_metric(self, name: str, value: Number) -> None: ...


def apply_metrics(
    target: MetricTarget, node: AttributeSource, specs: Iterable[MetricSpec]
) -> None:
    """Write every metric of ``specs`` read from ``node`` onto ``target``.

    Later writes replace earlier ones, so applying a table twice (or a table
    that restates a metric) leaves one value per name.
    """
    for spec in specs:
        target.set_metric(spec.metric_name, node.value(spec.attribute, spec.dtype))


def _table(*groups: Iterable[MetricSpec]) -> tuple[MetricSpec, ...]:
    """Concatenate spec groups, rejecting conflicting specs for one attribute."""
    seen: dict[str, MetricSpec] = {}
    result: list[MetricSpec] = []
    for group in groups:
        for spec in group:
            existing = seen.get(spec.attribute)
            if existing is None:
                seen[spec.attribute] = spec
                result.append(spec)
            elif existing != spec:
                raise ValueError(
                    f"Attribute '{spec.attribute}' mapped to both "
                    f"'{existing.name}' and '{spec.name}'"
                )
    return tuple(result)


# ---------------------------------------------------------------------------
# Shared groups
# ---------------------------------------------------------------------------

HALSTEAD = (
    MetricSpec("hlen", "halstead_length", int),
    MetricSpec("hvol", "halstead_volume", float),
    MetricSpec("hbug", "halstead_bugs", float),
    MetricSpec("heff", "halstead_effort", float),
)

MAINTAINABILITY = (
    MetricSpec("mi", "maintainability_index", float),
    MetricSpec("mi2", "maintainability_index_2", float),
    MetricSpec("mi21", "maintainability_index_2_1", float),
    MetricSpec("minc", "maintainability_index_nc", float),
    MetricSpec("minc2", "maintainability_index_nc_2", float),
)

CCN = MetricSpec("ccn", "cyclomatic_complexity_number", int)
CCN2 = MetricSpec("ccn2", "extended_cyclomatic_complexity_number", int)
CLOC = MetricSpec("cloc", "comment_lines_of_code", int)
ELOC = MetricSpec("eloc", "executable_lines_of_code", int)
LLOC = MetricSpec("lloc", "logical_lines_of_code", int)
LOC = MetricSpec("loc", "lines_of_code", int)
NCLOC = MetricSpec("ncloc", "non_comment_lines_of_code", int)
NOC = MetricSpec("noc", "number_of_classes", int)
NOF = MetricSpec("nof", "number_of_functions", int)
NOI = MetricSpec("noi", "number_of_interfaces", int)
NOM = MetricSpec("nom", "number_of_methods", int)
CR = MetricSpec("cr", "code_rank", float)
RCR = MetricSpec("rcr", "reverse_code_rank", float)


# ---------------------------------------------------------------------------
# Per-level tables
# ---------------------------------------------------------------------------

PROJECT_METRICS = _table(
    (
        MetricSpec("ahh", "average_hierarchy_height", float),
        MetricSpec("andc", "average_number_of_derived_classes", float),
        MetricSpec("calls", "calls", int),
        CCN,
        CCN2,
        CLOC,
        MetricSpec("clsa", "number_of_abstract_classes", int),
        MetricSpec("clsc", "number_of_concrete_classes", int),
        ELOC,
        MetricSpec("fanout", "number_of_referenced_classes", int),
        MetricSpec("leafs", "number_of_leaf_classes", int),
        LLOC,
        LOC,
        MetricSpec("maxDIT", "maximum_depth_of_inheritance_tree", int),
        NCLOC,
        NOC,
        NOF,
        NOI,
        NOM,
        MetricSpec("nop", "number_of_packages", int),
        MetricSpec("roots", "roots", int),
    ),
    HALSTEAD,
    MAINTAINABILITY,
)

PACKAGE_METRICS = _table(
    (CR, NOC, NOF, NOI, NOM, RCR),
    HALSTEAD,
    MAINTAINABILITY,
)

CLASS_METRICS = _table(
    (
        MetricSpec("ca", "afferent_coupling", int),
        MetricSpec("cbo", "coupling_between_calls", int),
        MetricSpec("ce", "efferent_coupling", int),
        MetricSpec("cis", "class_interface_size", int),
        CLOC,
        CR,
        MetricSpec("csz", "class_size", int),
        MetricSpec("dit", "depth_of_inheritance_tree", int),
        ELOC,
        MetricSpec("impl", "impl", int),
        LLOC,
        LOC,
        NCLOC,
        MetricSpec("noam", "number_of_added_methods", int),
        MetricSpec("nocc", "number_of_child_classes", int),
        NOM,
        MetricSpec("noom", "number_of_overwritten_methods", int),
        MetricSpec("npm", "number_of_public_methods", int),
        RCR,
        MetricSpec("vars", "number_of_properties", int),
        MetricSpec("varsi", "number_of_inherited_properties", int),
        MetricSpec("varsnp", "number_of_non_private_properties", int),
        MetricSpec("wmc", "weighted_method_count", int),
        MetricSpec("wmci", "inherited_weighted_method_count", int),
        MetricSpec("wmcnp", "non_private_weighted_method_count", int),
    ),
    HALSTEAD,
    MAINTAINABILITY,
)

OPERATION_METRICS = _table(
    (
        CCN,
        CCN2,
        CLOC,
        ELOC,
        LLOC,
        LOC,
        NCLOC,
        MetricSpec("npath", "npath_complexity", int),
    ),
    HALSTEAD,
    (
        MetricSpec("hvoc", "halstead_vocabulary", int),
        MetricSpec("hdiff", "halstead_difficulty", float),
        MetricSpec("op", "operators_count", int),
        MetricSpec("od", "operands_count", int),
        MetricSpec("uop", "unique_operators_count", int),
        MetricSpec("uod", "unique_operands_count", int),
    ),
    MAINTAINABILITY,
)
