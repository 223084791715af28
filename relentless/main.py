#!/usr/bin/env python3
"""
relentless - Daily protocol tracker with streaks, calendar and heatmap views.
"""

import argparse
import logging
import sys

from relentless.core.config import load_config, get_default_config_path
from relentless.commands import (
    AddCommand,
    ListCommand,
    DoneCommand,
    RemoveCommand,
    ArchiveCommand,
    CalendarCommand,
    HeatmapCommand,
    StatsCommand,
    ExportCommand,
    ImportCommand,
    ConfigCommand,
)


def main(argv=None):
    """Main entry point for relentless."""
    parser = argparse.ArgumentParser(
        description="Track daily protocols and the streaks they build",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  relentless add Cold shower          # Create a protocol
  relentless list                     # Today's protocols, undone first
  relentless done cold                # Toggle today's completion
  relentless done cold --date 2024-03-09
  relentless calendar --month 2024-03 # Month history
  relentless heatmap --days 90        # Trailing consistency grid
  relentless export backup.json       # Write a backup
        """
    )

    default_config = get_default_config_path()

    parser.add_argument(
        '--config',
        help=f'Path to configuration file (default: {default_config})',
        default=None
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    add_parser = subparsers.add_parser('add', help='Create a protocol')
    add_parser.add_argument('title', nargs='+', help='Protocol title')

    list_parser = subparsers.add_parser('list', help="Show today's protocols")
    list_parser.add_argument(
        '--all',
        action='store_true',
        help='Include archived protocols'
    )

    done_parser = subparsers.add_parser('done', help='Toggle completion for a day')
    done_parser.add_argument('task', help='Protocol id, id prefix or title')
    done_parser.add_argument(
        '--date',
        help='Date to toggle (YYYY-MM-DD, default: today)'
    )

    remove_parser = subparsers.add_parser('remove', help='Delete a protocol')
    remove_parser.add_argument('task', help='Protocol id, id prefix or title')

    archive_parser = subparsers.add_parser('archive', help='Archive a protocol')
    archive_parser.add_argument('task', help='Protocol id, id prefix or title')
    archive_parser.add_argument(
        '--undo',
        action='store_true',
        help='Restore an archived protocol'
    )

    calendar_parser = subparsers.add_parser('calendar', help='Show a month of history')
    calendar_parser.add_argument(
        '--month',
        help='Month to show (YYYY-MM, default: current month)'
    )
    calendar_parser.add_argument(
        '--day',
        help='Also list which protocols were done on this date (YYYY-MM-DD)'
    )

    heatmap_parser = subparsers.add_parser('heatmap', help='Show the consistency heatmap')
    heatmap_parser.add_argument(
        '--days',
        type=int,
        default=None,
        help='Number of trailing days (default: heatmap_days from config)'
    )

    subparsers.add_parser('stats', help='Show overall completion ratio')

    export_parser = subparsers.add_parser('export', help='Export data to a JSON backup')
    export_parser.add_argument(
        'path',
        nargs='?',
        help='Output file (default: a dated file in the exports directory)'
    )

    import_parser = subparsers.add_parser('import', help='Replace data from a JSON backup')
    import_parser.add_argument('path', help='Backup file to import')

    config_parser = subparsers.add_parser('config', help='Show or change settings')
    config_parser.add_argument(
        '--timezone',
        help='IANA timezone for day boundaries (empty string for local time)'
    )
    config_parser.add_argument(
        '--identity',
        help='Data namespace to use instead of the device id (empty string to clear)'
    )
    config_parser.add_argument(
        '--heatmap-days',
        type=int,
        help='Default heatmap window'
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    if not args.command:
        parser.print_help()
        return 1

    config = load_config(args.config)

    if args.verbose:
        actual_config_path = args.config if args.config else get_default_config_path()
        print(f"Using config: {actual_config_path}")

    try:
        if args.command == 'add':
            cmd = AddCommand(config, verbose=args.verbose)
            success = cmd.run(' '.join(args.title))

        elif args.command == 'list':
            cmd = ListCommand(config, verbose=args.verbose)
            success = cmd.run(include_archived=args.all)

        elif args.command == 'done':
            cmd = DoneCommand(config, verbose=args.verbose)
            success = cmd.run(args.task, date_str=args.date)

        elif args.command == 'remove':
            cmd = RemoveCommand(config, verbose=args.verbose)
            success = cmd.run(args.task)

        elif args.command == 'archive':
            cmd = ArchiveCommand(config, verbose=args.verbose)
            success = cmd.run(args.task, archived=not args.undo)

        elif args.command == 'calendar':
            cmd = CalendarCommand(config, verbose=args.verbose)
            success = cmd.run(month_str=args.month, day_str=args.day)

        elif args.command == 'heatmap':
            cmd = HeatmapCommand(config, verbose=args.verbose)
            success = cmd.run(days=args.days)

        elif args.command == 'stats':
            cmd = StatsCommand(config, verbose=args.verbose)
            success = cmd.run()

        elif args.command == 'export':
            cmd = ExportCommand(config, verbose=args.verbose)
            success = cmd.run(args.path)

        elif args.command == 'import':
            cmd = ImportCommand(config, verbose=args.verbose)
            success = cmd.run(args.path)

        elif args.command == 'config':
            cmd = ConfigCommand(config, verbose=args.verbose, config_path=args.config)
            success = cmd.run(
                timezone=args.timezone,
                identity=args.identity,
                heatmap_days=args.heatmap_days
            )

        else:
            print(f"Unknown command '{args.command}'.")
            return 1

        return 0 if success else 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 130
    except Exception as e:
        print(f"Error: {e}")
        if not args.verbose:
            print("Re-run with --verbose for more detail.")
        else:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
