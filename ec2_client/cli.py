"""
CLI module for EC2 API Client.
Handles all command-line interface operations.
"""

import sys
import argparse
import time
from pathlib import Path
from typing import Optional

from ec2_client.core.config import Config, ConfigError
from ec2_client.core.exceptions import (
    InvalidArgumentError,
    NetworkError,
    ProtocolError,
    SigningConfigurationError,
)
from ec2_client.core.logger import Logger, get_logger
from ec2_client.handlers.api_client import APIClient
from ec2_client.handlers.instance_manager import InstanceManager
from ec2_client.handlers.signer import Signer
from ec2_client.models.zones import Zones
from ec2_client.utils.formatting import (
    format_duration,
    format_instances,
    format_state_changes,
)


# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_INVALID_ARGUMENT = 2
EXIT_PROTOCOL_ERROR = 3
EXIT_NETWORK_ERROR = 4


class EC2Application:
    """Main application controller."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the application.

        Args:
            config_path: Optional path to config file
        """
        try:
            self.config = Config(config_path)
        except ConfigError as e:
            print(f"Configuration Error: {e}", file=sys.stderr)
            sys.exit(EXIT_CONFIG_ERROR)

        # Initialize logger (must be done before other components)
        try:
            Logger.initialize(
                self.config.log_file,
                self.config.log_level,
                self.config.log_max_size_mb,
                self.config.log_backup_count,
                secrets=[self.config.secret_access_key]
            )
            self.logger = get_logger()

            self.logger.info("=" * 70)
            self.logger.info("EC2 API Client Starting")
            self.logger.info(f"Endpoint: {self.config.endpoint_url}")
            self.logger.info(f"API version: {self.config.api_version}")
            self.logger.info("=" * 70)
        except OSError as e:
            print(f"Logger Initialization Error: {e}", file=sys.stderr)
            sys.exit(EXIT_CONFIG_ERROR)

        try:
            self.api_client = APIClient(
                self.config.credential,
                endpoint=self.config.endpoint_url,
                api_version=self.config.api_version,
                timeout=self.config.http_timeout,
                signer=Signer(self.config.signing_method)
            )
            self.manager = InstanceManager(self.config.credential, self.api_client)
        except SigningConfigurationError as e:
            self.logger.error(f"Signer initialization failed: {e}")
            sys.exit(EXIT_CONFIG_ERROR)

    def run(self, operation, *args) -> int:
        """
        Run one API operation, mapping each error kind to its exit code.

        Args:
            operation: Callable performing the request and printing results
        """
        start_time = time.time()
        try:
            operation(*args)
        except InvalidArgumentError as e:
            self.logger.error(f"Invalid argument: {e}")
            return EXIT_INVALID_ARGUMENT
        except ProtocolError as e:
            self.logger.error(f"Request rejected by service: {e.code}: {e.message}")
            return EXIT_PROTOCOL_ERROR
        except NetworkError as e:
            self.logger.error(f"Network error: {e}")
            return EXIT_NETWORK_ERROR

        self.logger.info(f"Completed in {format_duration(time.time() - start_time)}")
        return EXIT_SUCCESS


def cmd_describe(args, app: EC2Application) -> int:
    """Handle the 'describe' command."""
    def describe():
        instances = app.manager.describe_instances(args.instance_ids or None)
        print(format_instances(instances.values()))

    return app.run(describe)


def cmd_run(args, app: EC2Application) -> int:
    """Handle the 'run' command."""
    def launch():
        runner = app.manager.get_runner(args.image).set_number(args.count, args.max_count or 0)
        if args.type:
            runner = runner.set_type(args.type)
        if args.key_name:
            runner = runner.set_key_name(args.key_name)
        if args.zone:
            runner = runner.set_placement_availability_zone(args.zone)
        if args.security_group:
            runner = runner.set_security_groups(
                {position: group for position, group in enumerate(args.security_group, start=1)}
            )
        if args.user_data_file:
            try:
                data = Path(args.user_data_file).read_bytes()
            except OSError as e:
                raise InvalidArgumentError(f"Could not read user-data file: {e}")
            runner = runner.set_user_data(data)

        instances = runner.run_instances()
        print(format_instances(instances.values()))

    return app.run(launch)


def cmd_terminate(args, app: EC2Application) -> int:
    """Handle the 'terminate' command."""
    def terminate():
        changes = app.manager.terminate_instances(args.instance_ids)
        print(format_state_changes(changes.values()))

    return app.run(terminate)


def cmd_zones(args) -> int:
    """Handle the 'zones' command."""
    zones = Zones()
    for region in zones.regions():
        print(f"{region}: {', '.join(zones.zones_in(region))}")
    return EXIT_SUCCESS


def cmd_validate(args, app: EC2Application) -> int:
    """Handle the 'validate' command."""
    print("Validating configuration...")
    print(f"✓ Configuration loaded successfully")
    print(f"✓ Endpoint: {app.config.endpoint_url}")
    print(f"✓ API version: {app.config.api_version}")
    print(f"✓ Access key: {app.config.access_key_id}")

    # Sign a request without sending it
    try:
        print("\nTesting request signing...")
        request = app.api_client.build_request({'Action': 'DescribeInstances'})
        print(f"✓ Request signed with {request.params['SignatureMethod']}")
        print(f"  Signature preview: {request.signature[:12]}...")
    except SigningConfigurationError as e:
        print(f"✗ Request signing failed: {e}")
        return EXIT_CONFIG_ERROR

    print("\n✓ All validations passed")
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='EC2 API Client - describe, launch and terminate instances',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # List all instances
  %(prog)s describe

  # Launch two instances of an image
  %(prog)s run --image ami-12345678 --count 2 --type m1.large

  # Terminate instances
  %(prog)s terminate i-12345678 i-87654321

  # Validate configuration
  %(prog)s validate
        '''
    )

    parser.add_argument(
        '--config',
        help='Path to configuration file (default: config/config.yaml)',
        default=None
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    describe_parser = subparsers.add_parser('describe', help='Describe instances')
    describe_parser.add_argument('instance_ids', nargs='*', help='Instance ids (default: all)')

    run_parser = subparsers.add_parser('run', help='Launch instances')
    run_parser.add_argument('--image', required=True, help='Machine image id')
    run_parser.add_argument('--count', type=int, default=1, help='Minimum number of instances (default: 1)')
    run_parser.add_argument('--max-count', type=int, default=None, help='Maximum number of instances')
    run_parser.add_argument('--type', help='Instance type, e.g. m1.small')
    run_parser.add_argument('--key-name', help='Key pair name')
    run_parser.add_argument('--zone', help='Availability zone')
    run_parser.add_argument(
        '--security-group',
        action='append',
        help='Security group, by launch position (repeatable)'
    )
    run_parser.add_argument('--user-data-file', help='File whose contents are passed as user-data')

    terminate_parser = subparsers.add_parser('terminate', help='Terminate instances')
    terminate_parser.add_argument('instance_ids', nargs='+', help='Instance ids')

    subparsers.add_parser('zones', help='List known availability zones')
    subparsers.add_parser('validate', help='Validate configuration')

    return parser


def main(argv=None):
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_CONFIG_ERROR

    if args.command == 'zones':
        return cmd_zones(args)

    # Initialize application
    try:
        app = EC2Application(args.config)
    except SystemExit as e:
        return e.code

    # Execute command
    if args.command == 'describe':
        return cmd_describe(args, app)
    elif args.command == 'run':
        return cmd_run(args, app)
    elif args.command == 'terminate':
        return cmd_terminate(args, app)
    elif args.command == 'validate':
        return cmd_validate(args, app)
    else:
        parser.print_help()
        return EXIT_CONFIG_ERROR


if __name__ == '__main__':
    sys.exit(main())
