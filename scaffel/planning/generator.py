# scaffel/planning/generator.py
"""
Roadmap generation.

Each step is a hard gate on the next:
dependency validation -> cycle check -> phase organization ->
phase estimates -> total estimate -> assembled Roadmap.
"""

import logging
from datetime import datetime, timezone

from scaffel import GENERATOR_NAME, __version__
from scaffel.errors import ValidationError
from scaffel.planning.estimator import TimelineEstimator
from scaffel.planning.organizer import PhaseOrganizer
from scaffel.planning.resolver import DependencyResolver
from scaffel.planning.schemas import (
    DependencyGraph,
    Feature,
    ProductInput,
    Roadmap,
    RoadmapMetadata,
    Timeline,
)

logger = logging.getLogger(__name__)


def format_cycle(cycle: list[str]) -> str:
    return " -> ".join(cycle)


class RoadmapGenerator:
    """Orchestrates resolver, organizer and estimator into a Roadmap."""

    def __init__(
        self,
        resolver: DependencyResolver | None = None,
        organizer: PhaseOrganizer | None = None,
        estimator: TimelineEstimator | None = None,
    ) -> None:
        self.resolver = resolver or DependencyResolver()
        self.estimator = estimator or TimelineEstimator()
        self.organizer = organizer or PhaseOrganizer(self.resolver, self.estimator)

    def generate(
        self,
        product: ProductInput | dict,
        features: list[Feature] | None = None,
    ) -> Roadmap:
        """
        Generate a roadmap for a product and its features.

        Args:
            product: Product descriptor (a missing type defaults to "saas")
            features: Feature batch, possibly already enriched

        Returns:
            Immutable Roadmap

        Raises:
            ValidationError: On dangling or self dependencies, or on cycles.
                No partial roadmap is produced.
        """
        if not isinstance(product, ProductInput):
            product = ProductInput(**{k: v for k, v in product.items() if v is not None})
        features = list(features or [])

        graph: DependencyGraph | None = None
        if features:
            validation = self.resolver.validate_dependencies(features)
            if not validation.valid:
                raise ValidationError("Invalid feature dependencies", validation.errors)

            graph = self.resolver.resolve(features)
            if graph.cycles:
                raise ValidationError(
                    "Circular dependencies detected",
                    [format_cycle(cycle) for cycle in graph.cycles],
                )

        phases = [
            phase.model_copy(update={"estimated_time": self.organizer.estimate_phase(phase)})
            for phase in self.organizer.organize(features)
        ]
        total = self.estimator.estimate_total(phases)

        logger.info(
            f"Generated roadmap for '{product.name}': {len(phases)} phases, "
            f"{total.days} days ({total.weeks} weeks)"
        )

        return Roadmap(
            product=product,
            phases=phases,
            dependency_graph=graph,
            timeline=Timeline(total=total),
            metadata=RoadmapMetadata(
                generated_at=datetime.now(timezone.utc),
                version=__version__,
                generator=GENERATOR_NAME,
            ),
        )
