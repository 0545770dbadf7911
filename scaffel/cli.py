# scaffel/cli.py
"""
CLI interface for scaffel.

Thin presentation layer over the planning engine: parses input, runs
generation and turns ScaffelError into a printed error list and exit code 1.
"""

import logging

import typer

from scaffel.config.loader import load_settings, parse_project_file
from scaffel.config.schema import ScaffelSettings
from scaffel.errors import ScaffelError
from scaffel.logging_config import configure_logging
from scaffel.parsers import FeatureParser, ProductParser, TechStack, TechStackParser
from scaffel.planning.schemas import Feature, ProductInput

logger = logging.getLogger(__name__)

ROADMAP_FILENAME = "00-implementation-roadmap.md"

app = typer.Typer(
    name="scaffel",
    help="Generate technical roadmaps and implementation checklists from product requirements.",
    no_args_is_help=True,
)


def _setup(verbose: bool) -> ScaffelSettings:
    """Load settings and configure stderr logging."""
    settings = load_settings()
    verbosity = "verbose" if verbose else settings.output.verbosity
    configure_logging(verbosity, json_logs=settings.output.json_logs)
    return settings


def _fail(message: str, errors: list[str] | None = None) -> None:
    typer.echo(typer.style(f"✗ {message}", fg=typer.colors.RED), err=True)
    for error in errors or []:
        typer.echo(f"  - {error}", err=True)
    raise typer.Exit(1)


def _knowledge_base(settings: ScaffelSettings):
    from scaffel.knowledge import FeatureKnowledgeBase, JsonProvider

    if settings.knowledge.path:
        provider = JsonProvider(settings.knowledge.path, recursive=settings.knowledge.recursive)
        return FeatureKnowledgeBase(provider)
    return FeatureKnowledgeBase()


def _collect_inputs(
    config: str | None,
    product: str | None,
    description: str | None,
    product_type: str | None,
    features: str | None,
    tech_stack: str | None,
) -> tuple[ProductInput, list[Feature], TechStack | None]:
    """
    Merge project-file input with command-line overrides and validate it.

    Exits with code 1 listing every product or feature problem.
    """
    from scaffel.validation import sanitize_description, sanitize_feature_list

    product_data: dict = {}
    parsed_features: list[Feature] = []
    stack: TechStack | None = None
    feature_parser = FeatureParser()
    stack_parser = TechStackParser()

    if config:
        project = parse_project_file(config)
        product_data = project.product.model_dump()
        parsed_features = feature_parser.parse(project.features)
        stack = stack_parser.parse(project.tech_stack.model_dump())

    if product:
        product_data["name"] = product
    if description:
        product_data["description"] = description
    if product_type:
        product_data["type"] = product_type
    product_data["description"] = sanitize_description(product_data.get("description"))

    if features:
        parsed_features = feature_parser.parse(sanitize_feature_list(features))
    if tech_stack:
        stack = stack_parser.parse_from_string(tech_stack)

    product_parser = ProductParser()
    parsed_product = product_parser.parse(product_data)
    valid, errors = product_parser.validate(parsed_product)
    if not valid:
        _fail("Product validation failed:", errors)

    if parsed_features:
        valid, errors = feature_parser.validate(parsed_features)
        if not valid:
            _fail("Feature validation failed:", errors)

    return parsed_product, parsed_features, stack


@app.command()
def generate(
    product: str = typer.Option(None, "--product", "-p", help="Product name"),
    description: str = typer.Option(None, "--description", "-d", help="Product description"),
    product_type: str = typer.Option(None, "--type", "-t", help="Product type (saas, ecommerce, mobile, api, other)"),
    features: str = typer.Option(None, "--features", "-f", help="Comma-separated feature list"),
    tech_stack: str = typer.Option(None, "--tech-stack", "-s", help="Comma-separated tech stack"),
    config: str = typer.Option(None, "--config", "-c", help="Project file (YAML or JSON)"),
    output: str = typer.Option(None, "--output", "-o", help="Output directory"),
    checklists: bool = typer.Option(None, "--checklists/--no-checklists", help="Write one checklist per feature"),
    enrich: bool = typer.Option(True, "--enrich/--no-enrich", help="Fill feature details from the knowledge base"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Generate a phased implementation roadmap."""
    from scaffel.checklist import ChecklistGenerator, render_checklist_markdown
    from scaffel.output import RoadmapRenderer
    from scaffel.planning import RoadmapGenerator
    from scaffel.validation import sanitize_output_dir, slugify

    try:
        settings = _setup(verbose)
        parsed_product, parsed_features, stack = _collect_inputs(
            config, product, description, product_type, features, tech_stack
        )

        knowledge_base = _knowledge_base(settings) if enrich else None
        if knowledge_base is not None and parsed_features:
            parsed_features = knowledge_base.enrich_features(parsed_features)

        typer.echo("Generating roadmap...")
        roadmap = RoadmapGenerator().generate(parsed_product, parsed_features)

        output_dir = sanitize_output_dir(output or settings.output.dir)
        roadmap_path = output_dir / ROADMAP_FILENAME
        roadmap_path.write_text(RoadmapRenderer().render(roadmap), encoding="utf-8")
        logger.info(f"Wrote roadmap to {roadmap_path}")

        written_checklists = 0
        write_checklists = settings.output.write_checklists if checklists is None else checklists
        if write_checklists and roadmap.feature_count:
            checklist_dir = output_dir / "checklists"
            checklist_dir.mkdir(exist_ok=True)
            # roadmap features are final, so checklists match the roadmap's estimates
            generator = ChecklistGenerator(knowledge_base)
            index = 0
            for phase in roadmap.phases:
                for feature in phase.features:
                    index += 1
                    checklist = generator.generate(feature, tech_stack=stack, enrich=False)
                    path = checklist_dir / f"{index:02d}-{slugify(feature.id)}.md"
                    path.write_text(render_checklist_markdown(checklist), encoding="utf-8")
                    written_checklists += 1
    except ScaffelError as e:
        _fail(f"Error generating roadmap: {e.message}", getattr(e, "errors", None))
    except OSError as e:
        _fail(f"Error writing output: {e}")

    total = roadmap.timeline.total
    typer.echo(typer.style("✓ Roadmap generated successfully!", fg=typer.colors.GREEN))
    typer.echo(f"Output:    {roadmap_path}")
    typer.echo(f"Phases:    {len(roadmap.phases)}")
    typer.echo(f"Timeline:  {total.weeks} weeks ({total.days} days)")
    if written_checklists:
        typer.echo(f"Checklists: {written_checklists} written to {output_dir / 'checklists'}")
    if stack is not None:
        typer.echo(
            f"Stack:     {stack.framework} / {stack.backend} / {stack.database} / "
            f"{stack.language} / {stack.styling}"
        )


@app.command()
def validate(
    config: str = typer.Option(None, "--config", "-c", help="Project file (YAML or JSON)"),
    product: str = typer.Option(None, "--product", "-p", help="Product name"),
    features: str = typer.Option(None, "--features", "-f", help="Comma-separated feature list"),
    enrich: bool = typer.Option(True, "--enrich/--no-enrich", help="Validate after knowledge enrichment"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Validate product and feature dependencies without writing files."""
    from scaffel.planning import DependencyResolver
    from scaffel.planning.generator import format_cycle

    try:
        settings = _setup(verbose)
        parsed_product, parsed_features, _ = _collect_inputs(
            config, product, None, None, features, None
        )
        if enrich and parsed_features:
            parsed_features = _knowledge_base(settings).enrich_features(parsed_features)

        resolver = DependencyResolver()
        validation = resolver.validate_dependencies(parsed_features)
        if not validation.valid:
            _fail("Invalid feature dependencies", validation.errors)

        graph = resolver.resolve(parsed_features)
        if graph.cycles:
            _fail("Circular dependencies detected", [format_cycle(c) for c in graph.cycles])
    except ScaffelError as e:
        _fail(e.message, getattr(e, "errors", None))

    typer.echo(
        typer.style(
            f"✓ {parsed_product.name}: {len(parsed_features)} features, "
            f"{len(graph.edges)} dependencies, no cycles",
            fg=typer.colors.GREEN,
        )
    )
    if graph.critical_path:
        typer.echo(f"Execution order: {' -> '.join(graph.critical_path)}")


@app.command()
def checklist(
    name: str = typer.Argument(..., help="Feature name or alias"),
    tech_stack: str = typer.Option(None, "--tech-stack", "-s", help="Comma-separated tech stack"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Print the implementation checklist for one feature."""
    from scaffel.checklist import ChecklistGenerator, render_checklist_markdown
    from scaffel.parsers import feature_id_from_name

    try:
        settings = _setup(verbose)
        feature = Feature(id=feature_id_from_name(name, 0), name=name.strip())
        stack = TechStackParser().parse_from_string(tech_stack) if tech_stack else None
        result = ChecklistGenerator(_knowledge_base(settings)).generate(feature, tech_stack=stack)
    except ScaffelError as e:
        _fail(e.message, getattr(e, "errors", None))

    typer.echo(render_checklist_markdown(result))


@app.command()
def estimate(
    name: str = typer.Argument(..., help="Feature name"),
    category: str = typer.Option(None, "--category", help="Feature category"),
    priority: str = typer.Option(None, "--priority", help="critical, high, medium or low"),
    dependencies: int = typer.Option(0, "--dependencies", min=0, help="Number of dependencies"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Show how the effort estimate for a feature is derived."""
    from scaffel.planning import TimelineEstimator

    _setup(verbose)
    if priority is not None and priority not in ("critical", "high", "medium", "low"):
        _fail(f"Invalid priority '{priority}'", ["Use critical, high, medium or low"])

    feature = Feature(
        id="estimate",
        name=name,
        category=category,
        priority=priority,
        dependencies=[f"dep-{i}" for i in range(dependencies)],
    )
    estimator = TimelineEstimator()
    factors = estimator.explain(feature)
    result = estimator.estimate(feature)

    typer.echo(f"Feature:     {name}")
    typer.echo(f"Base days:   {factors.base_days}" + (f" ({factors.matched_rule})" if factors.matched_rule else ""))
    typer.echo(f"Category:    x{factors.category_multiplier}")
    typer.echo(f"Priority:    x{factors.priority_multiplier}")
    typer.echo(f"Dependency:  x{factors.dependency_multiplier}")
    typer.echo(f"Type:        x{factors.type_multiplier}")
    typer.echo(f"Estimate:    {result.days} days ({result.weeks} weeks)")


@app.command("features")
def list_features(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """List features known to the knowledge base."""
    from rich.console import Console
    from rich.table import Table

    try:
        settings = _setup(verbose)
        entries = _knowledge_base(settings).all_features()
    except ScaffelError as e:
        _fail(e.message, getattr(e, "errors", None))

    if not entries:
        typer.echo("No features in knowledge base.")
        return

    table = Table(title="Knowledge base features")
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Days", justify="right")
    table.add_column("Depends on")
    table.add_column("Aliases", style="dim")
    for entry in entries:
        table.add_row(
            entry.name,
            entry.category,
            str(entry.estimated_time.days),
            ", ".join(entry.common_dependencies) or "-",
            ", ".join(entry.aliases),
        )
    Console().print(table)


if __name__ == "__main__":
    app()
