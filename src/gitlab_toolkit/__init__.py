"""Command-line toolkit for the GitLab REST API."""

from dotenv import load_dotenv


def main() -> None:
    """Run the gitlab-toolkit CLI."""
    load_dotenv()

    from .commands import cli

    cli(obj={})


if __name__ == "__main__":
    main()
