"""Human-readable rendering of an analysis."""

from __future__ import annotations

from pathlib import Path

from .models import Analysis, STATUS_DIRECT_UNUSED, STATUS_UNUSED


def _plural(count: int) -> str:
    return "dependencies" if count > 1 else "dependency"


def _section(analysis: Analysis, label: str, names: tuple[str, ...]) -> list[str]:
    if not names:
        return []
    lines = [f"Used by {len(names)} {label} {_plural(len(names))}:"]
    for name in names:
        lines.append(f"- {name} [v{analysis.version_of(name)}]")
    return lines


def render_summary(analysis: Analysis) -> str:
    """Return the text report for one analysis."""
    lines: list[str] = []
    if analysis.is_direct:
        lines.append(
            "The module has been installed for the project (found in the package.json file)."
        )
        lines.append("")
    lines.append(f"[{Path(analysis.lock.source).name}]")

    lines.append(
        f"Analysis among {analysis.lock.edge_count} dependencies "
        f"({len(analysis.manifest)} modules)."
    )
    if analysis.status == STATUS_DIRECT_UNUSED:
        lines.append("It is a direct dependency; no other module depends on it.")
    elif analysis.status == STATUS_UNUSED:
        lines.append("No module depends on it.")
    lines.extend(_section(analysis, "direct", analysis.result.main))
    lines.extend(_section(analysis, "indirect", analysis.result.depends))

    if not analysis.found:
        lines.append(f"Module {analysis.target} was not found.")
    else:
        lines.append("")
        lines.append(f"Module {analysis.target} v{analysis.target_version}")

    return "\n".join(lines) + "\n"
