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

"""AWS FIS spot interruption tools.

These functions wrap the two FIS API calls the tool makes: creating an
experiment template that interrupts a spot instance, and starting an
experiment from a template. Service errors propagate to the caller unchanged;
nothing is retried here beyond what botocore does by default.
"""

from awslabs.ec2_spot_interrupter.models import ExperimentTemplateRequest, StartExperimentRequest
from loguru import logger
from typing import Any, Optional


def create_spot_interruption_template(
    fis_client: Any,
    instance_arn: str,
    role_arn: str,
    name: Optional[str] = None,
) -> str:
    """Create an experiment template that interrupts the given spot instance.

    Args:
        fis_client: boto3 FIS client
        instance_arn: ARN of the spot instance to interrupt
        role_arn: IAM role ARN that FIS assumes to run the experiment
        name: Optional value for the template's Name tag

    Returns:
        The ID of the new experiment template
    """
    request = ExperimentTemplateRequest.for_spot_instance(instance_arn, role_arn, name=name)
    logger.debug(f'Creating experiment template for {instance_arn}')

    response = fis_client.create_experiment_template(**request.to_api_params())
    return response['experimentTemplate']['id']


def start_experiment(fis_client: Any, template_id: str, name: Optional[str] = None) -> str:
    """Start an experiment from a template and return its experiment ID."""
    request = StartExperimentRequest(
        experiment_template_id=template_id,
        tags={'Name': name} if name else None,
    )
    logger.debug(f'Starting experiment from template {template_id}')

    response = fis_client.start_experiment(**request.to_api_params())
    return response['experiment']['id']
