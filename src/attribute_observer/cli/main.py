"""attribute-observer CLI entry point."""

from pathlib import Path

import click

from .stubs import ObserverStub


@click.group()
def cli():
    """Attribute observer tooling."""
    pass


@cli.command()
@click.argument("name")
@click.option("--model", default=None, help="Import path of the observed model, e.g. 'app.models:Post'.")
@click.option(
    "--attribute",
    "attributes",
    multiple=True,
    help="Attribute to observe. Repeat for several attributes.",
)
@click.option(
    "--event",
    "events",
    multiple=True,
    help="Lifecycle event to react to. Repeat for several events.",
)
@click.option(
    "--path",
    "target_dir",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to write the observer module into.",
)
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing module.")
def make(name, model, attributes, events, target_dir: Path, force: bool):
    """Generate a new attribute observer module."""
    try:
        stub = ObserverStub(
            class_name=name,
            model=model,
            attributes=attributes or ("attribute",),
            events=events or ("updated",),
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    target = target_dir / f"{stub.module_name}.py"
    if target.exists() and not force:
        click.echo(f"Error: {target} already exists. Use --force to overwrite.", err=True)
        raise SystemExit(1)

    target_dir.mkdir(parents=True, exist_ok=True)
    target.write_text(stub.render(), encoding="utf-8")
    click.echo(f"Created {stub.class_name} at {target}")
    for method_name in stub.method_names():
        click.echo(f"  - {method_name}")
