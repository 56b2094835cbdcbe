"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import sys

from closure_end_linter.domain.errors import ClosureLintError
from closure_end_linter.infrastructure.di.container import ClosureLintContainer
from closure_end_linter.interface.cli import CLIDependencies, create_app


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    try:
        container = ClosureLintContainer()
    except ClosureLintError as e:
        print(f"closure-lint: {e}", file=sys.stderr)
        sys.exit(2)

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        structure_provider=container.get_structure_provider(),
        guidance_service=container.get_guidance_service(),
        rule=container.get_rule(),
        reporter=container.get_reporter("table"),
        json_reporter=container.get_reporter("json"),
    )

    app = create_app(deps)
    app()


if __name__ == "__main__":
    main()
