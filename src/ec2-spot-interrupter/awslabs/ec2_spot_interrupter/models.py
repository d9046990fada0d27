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

"""Request models for the AWS FIS calls made by the spot interrupter."""

from awslabs.ec2_spot_interrupter.consts import (
    INTERRUPTION_DELAY_IMMEDIATE,
    INTERRUPTION_DELAY_PARAM,
    SPOT_ACTION_ID,
    SPOT_ACTION_NAME,
    SPOT_ACTION_TARGET_KEY,
    SPOT_RESOURCE_TYPE,
    SPOT_SELECTION_MODE,
    SPOT_TARGET_NAME,
    STOP_CONDITION_SOURCE_NONE,
    TEMPLATE_DESCRIPTION,
)
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional


class FisModel(BaseModel):
    """Base model that serializes to the camelCase keys the FIS API expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_api_params(self) -> Dict[str, Any]:
        """Return the keyword arguments for the matching boto3 FIS call."""
        return self.model_dump(by_alias=True, exclude_none=True)


class StopCondition(FisModel):
    """Stop condition for an experiment template."""

    source: str = Field(..., description='Stop condition source, or "none" to never stop early')
    value: Optional[str] = Field(None, description='Alarm ARN when source is a CloudWatch alarm')


class Target(FisModel):
    """Target definition for an experiment template."""

    resource_type: str = Field(..., description='FIS resource type')
    resource_arns: List[str] = Field(..., min_length=1, description='ARNs of the target resources')
    selection_mode: str = Field(SPOT_SELECTION_MODE, description='How targets are selected')


class Action(FisModel):
    """Action definition for an experiment template."""

    action_id: str = Field(..., description='FIS action identifier')
    description: Optional[str] = None
    parameters: Dict[str, str] = Field(default_factory=dict)
    targets: Dict[str, str] = Field(default_factory=dict)


class ExperimentTemplateRequest(FisModel):
    """Parameters for CreateExperimentTemplate."""

    description: str
    stop_conditions: List[StopCondition]
    targets: Dict[str, Target]
    actions: Dict[str, Action]
    role_arn: str = Field(..., min_length=1, description='IAM role FIS assumes to run the experiment')
    tags: Optional[Dict[str, str]] = None

    @classmethod
    def for_spot_instance(
        cls, instance_arn: str, role_arn: str, name: Optional[str] = None
    ) -> 'ExperimentTemplateRequest':
        """Build a template that interrupts a single spot instance immediately."""
        return cls(
            description=TEMPLATE_DESCRIPTION,
            stop_conditions=[StopCondition(source=STOP_CONDITION_SOURCE_NONE)],
            targets={
                SPOT_TARGET_NAME: Target(
                    resource_type=SPOT_RESOURCE_TYPE,
                    resource_arns=[instance_arn],
                    selection_mode=SPOT_SELECTION_MODE,
                )
            },
            actions={
                SPOT_ACTION_NAME: Action(
                    action_id=SPOT_ACTION_ID,
                    parameters={INTERRUPTION_DELAY_PARAM: INTERRUPTION_DELAY_IMMEDIATE},
                    targets={SPOT_ACTION_TARGET_KEY: SPOT_TARGET_NAME},
                )
            },
            role_arn=role_arn,
            tags={'Name': name} if name else None,
        )


class StartExperimentRequest(FisModel):
    """Parameters for StartExperiment."""

    experiment_template_id: str = Field(..., min_length=1)
    tags: Optional[Dict[str, str]] = None
