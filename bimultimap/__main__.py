import logging

import typer

from bimultimap.configurations import GridConfigurations
from bimultimap.errors import ConfigurationError, InvalidCapacityError
from bimultimap.map import BiMultiMap

app = typer.Typer()


def split_assignment(text: str) -> tuple[str, str]:
    name, separator, value = text.partition("=")
    if not separator:
        raise typer.BadParameter(f"expected NAME=VALUE, got {text!r}")
    return name, value


def load_configurations(configurations: GridConfigurations, assignments: list[str]) -> GridConfigurations:
    for assignment in assignments:
        name, value = split_assignment(assignment)
        try:
            configurations.set_value(name.encode(), value.encode())
        except ConfigurationError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=1)
    return configurations


def build_map(configurations: GridConfigurations, relations: list[str]) -> BiMultiMap[str, str]:
    try:
        bimultimap: BiMultiMap[str, str] = BiMultiMap.from_configurations(configurations)
    except InvalidCapacityError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    bimultimap.update(split_assignment(relation) for relation in relations)
    return bimultimap


@app.callback()
def main(verbose: bool = False) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@app.command()
def query(
    relation: list[str] = typer.Option([], help="KEY=VALUE relation, may be repeated"),
    config: list[str] = typer.Option([], help="NAME=VALUE grid configuration, may be repeated"),
    key: str | None = None,
    value: str | None = None,
    rows: int = 64,
    cols: int = 64,
    seed: str = "",
) -> None:
    configurations = load_configurations(GridConfigurations(rows=rows, cols=cols, hash_seed=seed.encode()), config)
    bimultimap = build_map(configurations, relation)
    if key is None and value is None:
        typer.echo(repr(bimultimap))
        return
    if key is not None:
        for related_value in sorted(bimultimap.key_iter(key)):
            typer.echo(related_value)
    if value is not None:
        for related_key in sorted(bimultimap.val_iter(value)):
            typer.echo(related_key)


@app.command()
def stats(
    relation: list[str] = typer.Option([], help="KEY=VALUE relation, may be repeated"),
    config: list[str] = typer.Option([], help="NAME=VALUE grid configuration, may be repeated"),
    rows: int = 64,
    cols: int = 64,
    seed: str = "",
) -> None:
    configurations = load_configurations(GridConfigurations(rows=rows, cols=cols, hash_seed=seed.encode()), config)
    grid_stats = build_map(configurations, relation).stats()
    typer.echo(f"relations: {grid_stats.relations}")
    typer.echo(f"buckets: {grid_stats.buckets}")
    typer.echo(f"empty_buckets: {grid_stats.empty_buckets}")
    typer.echo(f"max_bucket_size: {grid_stats.max_bucket_size}")
    typer.echo(f"load_factor: {grid_stats.load_factor:.4f}")


@app.command(name="config")
def show_config(
    patterns: list[str] = typer.Argument(None, help="glob patterns of configuration names"),
    config: list[str] = typer.Option([], help="NAME=VALUE grid configuration, may be repeated"),
) -> None:
    configurations = load_configurations(GridConfigurations(), config)
    names = configurations.get_names(*(pattern.encode() for pattern in patterns or ["*"]))
    for name, value in sorted(configurations.info(names).items()):
        typer.echo(f"{name.decode()}: {value.decode() if isinstance(value, bytes) else value}")


if __name__ == "__main__":
    app()
