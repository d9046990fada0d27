# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command line entry point for the EC2 spot interrupter."""

import argparse
import boto3
import os
import sys
from awslabs.ec2_spot_interrupter import __version__
from awslabs.ec2_spot_interrupter.consts import (
    AWS_CONFIG_SIGNATURE_VERSION,
    DEFAULT_AWS_REGION,
    DEFAULT_LOG_LEVEL,
    ENV_AWS_REGION,
    ENV_LOG_LEVEL,
    SERVICE_FIS,
)
from awslabs.ec2_spot_interrupter.tools.fis_service_tools import (
    create_spot_interruption_template,
    start_experiment,
)
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv
from loguru import logger
from typing import Any, List, Optional


def configure_logging():
    """Send log output to stderr at the level set in the environment."""
    logger.remove()
    logger.add(sys.stderr, level=os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL))


def initialize_fis_client(region: str, profile: Optional[str] = None) -> Any:
    """Create an AWS FIS client for the specified region and profile."""
    session = (
        boto3.Session(profile_name=profile, region_name=region)
        if profile
        else boto3.Session(region_name=region)
    )

    aws_config = Config(
        region_name=region,
        signature_version=AWS_CONFIG_SIGNATURE_VERSION,
        user_agent_extra=f'awslabs/ec2-spot-interrupter/{__version__}',
    )

    client = session.client(SERVICE_FIS, config=aws_config)
    logger.debug(f'FIS client initialized in region {region}')
    return client


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command line flags."""
    parser = argparse.ArgumentParser(
        prog='ec2-spot-interrupter',
        description='Interrupt EC2 Spot Instances with AWS Fault Injection Simulator (FIS)',
    )
    parser.add_argument(
        '--create-template',
        action='store_true',
        help='Create an experiment template',
    )
    parser.add_argument(
        '--interrupt-spot',
        action='store_true',
        help='Interrupt a spot instance',
    )
    parser.add_argument(
        '--template-id',
        default='',
        help='Template ID for interrupting a spot instance',
    )
    parser.add_argument(
        '--instance-arn',
        default='',
        help='Instance ARN for creating a template',
    )
    parser.add_argument(
        '--fis-role-arn',
        default='',
        help='FIS role ARN for creating a template',
    )
    parser.add_argument(
        '--name',
        help='Name tag to apply to the created template or started experiment',
    )
    parser.add_argument(
        '--aws-profile',
        help='AWS profile to use for credentials (default: uses default profile or environment)',
    )
    parser.add_argument(
        '--aws-region',
        help='AWS region to use (default: us-east-1 or AWS_REGION environment variable)',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def validate_args(parser: argparse.ArgumentParser, args: argparse.Namespace):
    """Reject flag combinations that cannot be dispatched.

    Errors are reported through ``parser.error``, which exits with status 2
    before any AWS client is created.
    """
    if args.create_template and args.interrupt_spot:
        parser.error(
            'Both --create-template and --interrupt-spot flags are specified. '
            'Please specify only one.'
        )
    if not args.create_template and not args.interrupt_spot:
        parser.error('Either --create-template or --interrupt-spot flag must be specified.')

    if args.create_template:
        if not args.instance_arn:
            parser.error('--instance-arn must be specified when using --create-template.')
        if not args.fis_role_arn:
            parser.error('--fis-role-arn must be specified when using --create-template.')
    elif not args.template_id:
        parser.error('--template-id must be specified when using --interrupt-spot.')


def main(argv: Optional[List[str]] = None):
    """Run the EC2 spot interrupter.

    Exactly one mode is run per invocation:

    - ``--create-template`` creates an FIS experiment template that sends a
      spot interruption to ``--instance-arn`` with no delay, using
      ``--fis-role-arn``, and logs the new template ID.
    - ``--interrupt-spot`` starts an experiment from ``--template-id``.

    Usage errors exit with status 2, configuration and AWS API errors with
    status 1. Nothing is retried.
    """
    load_dotenv()
    configure_logging()

    parser = build_parser()
    args = parser.parse_args(argv)
    validate_args(parser, args)

    # Priority: CLI arg > env var > default
    effective_region = args.aws_region or os.getenv(ENV_AWS_REGION, DEFAULT_AWS_REGION)
    logger.debug(
        f'Using AWS_PROFILE: {args.aws_profile or "default"}, AWS_REGION: {effective_region}'
    )

    try:
        fis_client = initialize_fis_client(effective_region, args.aws_profile)
    except BotoCoreError as e:
        logger.error(f'Configuration error: {str(e)}')
        sys.exit(1)

    if args.create_template:
        try:
            template_id = create_spot_interruption_template(
                fis_client, args.instance_arn, args.fis_role_arn, name=args.name
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f'Failed to create template: {str(e)}')
            sys.exit(1)
        logger.info(f'Created template with ID: {template_id}')
    else:
        try:
            experiment_id = start_experiment(fis_client, args.template_id, name=args.name)
        except (BotoCoreError, ClientError) as e:
            logger.error(f'Failed to trigger experiment: {str(e)}')
            sys.exit(1)
        logger.info(
            f'Successfully triggered experiment {experiment_id} from template {args.template_id}'
        )


if __name__ == '__main__':
    main()
