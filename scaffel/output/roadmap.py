# scaffel/output/roadmap.py
"""
Roadmap renderer for converting a Roadmap to structured markdown.

Converts the generated roadmap into a markdown file with metadata frontmatter.
"""

from collections.abc import Sequence

from scaffel.planning.schemas import Phase, Roadmap


def phase_week_ranges(phases: Sequence[Phase]) -> list[tuple[int, int]]:
    """
    Week range (start, end) for each phase when run back to back.

    Phases without a positive week estimate occupy one week.
    """
    ranges: list[tuple[int, int]] = []
    elapsed = 0
    for phase in phases:
        weeks = phase.estimated_time.weeks if phase.estimated_time and phase.estimated_time.weeks else 1
        ranges.append((elapsed + 1, elapsed + weeks))
        elapsed += weeks
    return ranges


class RoadmapRenderer:
    """
    Converts a Roadmap to markdown.

    Format:
        ---
        generated_at: ISO timestamp
        generator: name
        version: x.y.z
        total_days: int
        total_weeks: int
        ---

        # {product} Implementation Roadmap

        ## Overview
        ...

        ## Phase N: {name} (Weeks a-b)
        ...

        ## Execution Order
        ...
    """

    def render(self, roadmap: Roadmap) -> str:
        """
        Render a Roadmap to a markdown string.

        Args:
            roadmap: Generated roadmap

        Returns:
            Formatted markdown string
        """
        sections = []

        sections.append(self._render_frontmatter(roadmap))

        product = roadmap.product
        total = roadmap.timeline.total
        sections.append(f"# {product.name} Implementation Roadmap")
        sections.append("")
        sections.append(
            f"**Generated:** {roadmap.metadata.generated_at.strftime('%B %d, %Y')}"
        )
        sections.append(
            f"**Generator:** {roadmap.metadata.generator} v{roadmap.metadata.version}"
        )
        sections.append("")
        sections.append("---")
        sections.append("")

        # Overview
        sections.append("## Overview")
        sections.append("")
        sections.append(product.description or f"Technical roadmap for {product.name}")
        sections.append("")
        sections.append(f"**Product Type:** {product.type}")
        if product.domain:
            sections.append(f"**Domain:** {product.domain}")
        sections.append(
            f"**Estimated Timeline:** {total.weeks} weeks ({total.days} days)"
        )
        sections.append(f"**Phases:** {len(roadmap.phases)}")
        sections.append("")

        if roadmap.phases:
            sections.append("| Phase | Name | Weeks | Days | Features |")
            sections.append("|---|---|---|---|---|")
            for phase, (start, end) in zip(roadmap.phases, phase_week_ranges(roadmap.phases)):
                days = phase.estimated_time.days if phase.estimated_time else 0
                sections.append(
                    f"| {phase.number} | {phase.name} | {start}-{end} | {days} | {len(phase.features)} |"
                )
            sections.append("")

        sections.append("---")
        sections.append("")

        # Phases
        for phase, (start, end) in zip(roadmap.phases, phase_week_ranges(roadmap.phases)):
            sections.append(f"## Phase {phase.number}: {phase.name} (Weeks {start}-{end})")
            sections.append("")
            sections.append(f"**Goal:** {phase.goal}")
            if phase.estimated_time:
                sections.append(
                    f"**Estimated Time:** {phase.estimated_time.days} days "
                    f"({phase.estimated_time.weeks} weeks)"
                )
            sections.append("")

            for i, feature in enumerate(phase.features, start=1):
                sections.append(f"### {phase.number}.{i} {feature.name}")
                sections.append("")
                if feature.description:
                    sections.append(feature.description)
                    sections.append("")
                sections.append(f"- **Priority:** {feature.priority or 'medium'}")
                if feature.category:
                    sections.append(f"- **Category:** {feature.category}")
                if feature.estimated_time:
                    sections.append(f"- **Estimated Time:** {feature.estimated_time.days} days")
                if feature.depends_on:
                    sections.append(f"- **Dependencies:** {', '.join(feature.depends_on)}")
                sections.append("")

            sections.append("---")
            sections.append("")

        # Execution order
        graph = roadmap.dependency_graph
        if graph and graph.critical_path:
            names = {node.id: node.name for node in graph.nodes}
            sections.append("## Execution Order")
            sections.append("")
            for i, feature_id in enumerate(graph.critical_path, start=1):
                sections.append(f"{i}. {names.get(feature_id, feature_id)} (`{feature_id}`)")
            sections.append("")

        return "\n".join(sections)

    def _render_frontmatter(self, roadmap: Roadmap) -> str:
        """Render YAML frontmatter with metadata."""
        lines = ["---"]
        lines.append(f'generated_at: "{roadmap.metadata.generated_at.isoformat()}"')
        lines.append(f"generator: {roadmap.metadata.generator}")
        lines.append(f'version: "{roadmap.metadata.version}"')
        lines.append(f'product: "{roadmap.product.name}"')
        lines.append(f"total_days: {roadmap.timeline.total.days}")
        lines.append(f"total_weeks: {roadmap.timeline.total.weeks}")
        lines.append("---")
        lines.append("")
        return "\n".join(lines)
