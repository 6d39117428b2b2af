"""
Command line interface for the golf booking application.
"""

import argparse
import json
import sys
from typing import Any

from tabulate import tabulate

from golfmatch.config.logging import setup_logging
from golfmatch.config.logging_filters import with_correlation_id
from golfmatch.config.settings import ConfigurationManager
from golfmatch.config.validation import ConfigValidationError
from golfmatch.config.validation import validate_config
from golfmatch.exceptions import GolfMatchError
from golfmatch.health import HEALTHY
from golfmatch.health import get_health_status
from golfmatch.models.course import Course
from golfmatch.models.round import Round
from golfmatch.services.course_service import CourseService
from golfmatch.services.course_service import booking_link
from golfmatch.services.course_service import filter_courses
from golfmatch.services.stats_service import compute_stats
from golfmatch.utils.cli_utils import ArgumentValidator
from golfmatch.utils.cli_utils import CLIBuilder
from golfmatch.utils.cli_utils import CLIContext
from golfmatch.utils.cli_utils import CLIOptionFactory
from golfmatch.utils.cli_utils import CommandRegistry
from golfmatch.utils.cli_utils import subcommand_dest
from golfmatch.utils.geo import BoundingBox
from golfmatch.utils.logging_utils import get_logger


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))

def print_courses(courses: list[Course], output_format: str) -> None:
    """Print courses as a table or JSON."""
    if output_format == 'json':
        print_json([c.to_dict() for c in courses])
        return

    if not courses:
        print("No courses found")
        return

    table = [
        [c.id, c.name, c.location, c.holes, c.par, f"{c.rating:.1f}"]
        for c in courses
    ]
    print(tabulate(table, headers=["ID", "Name", "Location", "Holes", "Par", "Rating"], tablefmt="psql"))
    print(f"{len(courses)} courses")

class ListCommands:
    """List command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='courses',
        help_text='List golf courses, best rated first',
        options=[
            CLIOptionFactory.create_format_option(),
            {
                'name': '--search',
                'help': 'Only show courses whose name or location contains this text'
            }
        ],
        parent_command='list'
    )
    def list_courses(ctx: CLIContext) -> int:
        courses = CourseService(ctx.config).list_courses()
        print_courses(filter_courses(courses, ctx.args.search), ctx.args.format)
        return 0

class GetCommands:
    """Get command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='course',
        help_text='Show details of one course',
        options=[
            {
                'name': 'course_id',
                'help': 'Course ID'
            },
            CLIOptionFactory.create_format_option()
        ],
        parent_command='get'
    )
    def get_course(ctx: CLIContext) -> int:
        course = CourseService(ctx.config).get_course(ctx.args.course_id)

        if ctx.args.format == 'json':
            print_json(course.to_dict())
            return 0

        rows = [
            ["Name", course.name],
            ["Location", course.location],
            ["Address", course.address or "-"],
            ["Holes / Par", f"{course.holes} / {course.par}"],
            ["Rating", f"{course.rating:.1f}"],
            ["Slope", course.slope if course.slope is not None else "-"],
            ["Price", f"{course.price:.0f}€" if course.price is not None else "-"],
            ["Amenities", ", ".join(course.amenities) or "-"],
            ["Booking", booking_link(course)],
        ]
        print(tabulate(rows, tablefmt="plain"))
        if course.description:
            print(f"\n{course.description}")
        return 0

class SearchCommands:
    """Map search command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='area',
        help_text='Search golf courses inside a map area',
        options=[
            *CLIOptionFactory.create_bounds_options(),
            {
                'name': '--only-new',
                'action': 'store_true',
                'help': 'Only show courses that are not already listed'
            },
            CLIOptionFactory.create_format_option()
        ],
        parent_command='search'
    )
    def search_area(ctx: CLIContext) -> int:
        bounds = BoundingBox(
            south=ctx.args.south,
            west=ctx.args.west,
            north=ctx.args.north,
            east=ctx.args.east
        )
        service = CourseService(ctx.config)
        existing = service.list_courses()
        merged = service.search_area(bounds, existing)
        courses = merged[len(existing):] if ctx.args.only_new else merged
        print_courses(courses, ctx.args.format)
        return 0

class StatsCommands:
    """Offline statistics."""

    @staticmethod
    @CommandRegistry.register(
        name='stats',
        help_text='Compute average, best score and handicap estimate from scores',
        options=[
            {
                'name': '--scores',
                'type': int,
                'nargs': '+',
                'required': True,
                'help': 'Round scores',
                'validator': lambda values: all(v > 0 for v in values)
            },
            {
                'name': '--par',
                'type': int,
                'nargs': '+',
                'help': 'Course par, one value for all rounds or one per score (default: 72)',
                'validator': lambda values: all(v > 0 for v in values)
            },
            CLIOptionFactory.create_format_option()
        ]
    )
    def stats(ctx: CLIContext) -> int:
        scores: list[int] = ctx.args.scores
        pars: list[int] = ctx.args.par or []
        if len(pars) not in (0, 1, len(scores)):
            ctx.logger.error("--par takes one value or one value per score")
            return 1
        if len(pars) == 1:
            pars = pars * len(scores)

        rounds = [
            Round(
                id=None,
                user_id='',
                course_id='',
                date='',
                score=score,
                course_par=pars[i] if pars else None
            )
            for i, score in enumerate(scores)
        ]
        stats = compute_stats(rounds)

        if ctx.args.format == 'json':
            print_json(stats.to_dict())
        else:
            print(tabulate(
                [[stats.rounds_played, stats.average_score, stats.best_score, f"{stats.handicap:.1f}"]],
                headers=["Rounds", "Average", "Best", "Handicap"],
                tablefmt="psql"
            ))
        return 0

class CheckCommands:
    """System check command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='health',
        help_text='Check configuration, bundled data and backend connectivity',
        options=[CLIOptionFactory.create_format_option()],
        parent_command='check'
    )
    def check_health(ctx: CLIContext) -> int:
        status = get_health_status(ctx.config)

        if ctx.args.format == 'json':
            print_json(status)
        else:
            rows = [[c['name'], c['status'], c['message']] for c in status['checks']]
            print(tabulate(rows, headers=["Check", "Status", "Message"], tablefmt="psql"))
            print(f"Overall: {status['status']}")
        return 0 if status['status'] == HEALTHY else 1

class ServeCommands:
    """HTTP server."""

    @staticmethod
    @CommandRegistry.register(
        name='serve',
        help_text='Run the HTTP API server',
        options=[
            {
                'name': '--host',
                'help': 'Interface to bind (default: server.host from configuration)'
            },
            {
                'name': '--port',
                'type': int,
                'help': 'Port to listen on (default: server.port from configuration)',
                'validator': lambda x: 0 < x < 65536
            }
        ]
    )
    def serve(ctx: CLIContext) -> int:
        from golfmatch.app import create_app

        app = create_app(
            ctx.args.config_dir,
            dev_mode=ctx.args.dev,
            verbose=ctx.args.verbose,
            log_file=ctx.args.log_file
        )
        host = ctx.args.host or ctx.config.server.get('host', '127.0.0.1')
        port = ctx.args.port or int(ctx.config.server.get('port', 5000))
        ctx.logger.info(f"Serving on {host}:{port}")
        app.run(host=host, port=port, debug=ctx.args.dev)
        return 0

def create_parser() -> argparse.ArgumentParser:
    """Create argument parser from the registered commands."""
    builder = CLIBuilder(
        description='GolfMatch: find golf courses, book tee times and track your scores'
    )

    for command in CommandRegistry.commands():
        builder.add_command(command)

    return builder.build()

def resolve_command_name(args: argparse.Namespace) -> str:
    """Registered name of the command selected on the command line."""
    subcommand = getattr(args, subcommand_dest(args.command), None)
    return subcommand or args.command

@with_correlation_id
def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI, one correlation ID per invocation."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logger = get_logger(__name__)
    try:
        config_manager = ConfigurationManager()
        config = config_manager.load_config(args.config_dir, dev_mode=args.dev, verbose=args.verbose)
        validate_config(config)

        setup_logging(config, dev_mode=args.dev, verbose=args.verbose, log_file=args.log_file)

        ctx = CLIContext(
            args=args,
            logger=logger,
            config=config,
            parser=parser
        )

        command = CommandRegistry.get_command(resolve_command_name(args))
        if not command:
            logger.error(f"Unknown command: {args.command}")
            return 1

        errors = ArgumentValidator.validate_args(args, command)
        if errors:
            for error in errors:
                print(error, file=sys.stderr)
            return 2

        return command.handler(ctx)

    except ConfigValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    except GolfMatchError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Unhandled exception")
        return 1

if __name__ == '__main__':
    sys.exit(main())
