"""
sass-bootstrapper - dependency resolver for SASS/SCSS partials.

Usage:
    sass-bootstrapper build
    sass-bootstrapper order --json
    sass-bootstrapper clean-cache
"""

import typer

from sass_bootstrapper.cli.commands import build, clean_cache, init, order

app = typer.Typer(
    name="sass-bootstrapper",
    help="Resolve SASS/SCSS partial dependencies and generate a bootstrap file",
    add_completion=False,
    no_args_is_help=True,
)

app.command()(build)
app.command()(order)
app.command()(init)
app.command(name="clean-cache")(clean_cache)


def main():
    app()


if __name__ == "__main__":
    main()
