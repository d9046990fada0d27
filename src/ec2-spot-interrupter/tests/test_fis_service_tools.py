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
"""Tests for the FIS service tools."""

import pytest
from awslabs.ec2_spot_interrupter.tools.fis_service_tools import (
    create_spot_interruption_template,
    start_experiment,
)
from botocore.exceptions import ClientError
from unittest.mock import MagicMock


INSTANCE_ARN = 'arn:aws:ec2:us-east-1:123456789012:instance/i-0abc1234def567890'
ROLE_ARN = 'arn:aws:iam::123456789012:role/FisRole'


class TestCreateSpotInterruptionTemplate:
    """Test cases for create_spot_interruption_template."""

    @pytest.fixture(autouse=True)
    def setup_mocks(self):
        """Set up a mock FIS client."""
        self.mock_aws_fis = MagicMock()
        self.mock_aws_fis.create_experiment_template.return_value = {
            'experimentTemplate': {
                'id': 'EXT1a2b3c4d5e6f7',
                'description': 'Created by ec2-spot-interrupter tool',
            }
        }

    def test_returns_template_id(self):
        """Test that the created template ID is returned."""
        result = create_spot_interruption_template(self.mock_aws_fis, INSTANCE_ARN, ROLE_ARN)
        assert result == 'EXT1a2b3c4d5e6f7'

    def test_request_targets_single_spot_instance(self):
        """Test the template targets exactly the given instance."""
        create_spot_interruption_template(self.mock_aws_fis, INSTANCE_ARN, ROLE_ARN)

        kwargs = self.mock_aws_fis.create_experiment_template.call_args.kwargs
        assert kwargs['roleArn'] == ROLE_ARN
        assert kwargs['stopConditions'] == [{'source': 'none'}]
        assert len(kwargs['targets']) == 1
        target = kwargs['targets']['targetSpot']
        assert target['resourceType'] == 'aws:ec2:spot-instance'
        assert target['resourceArns'] == [INSTANCE_ARN]
        assert target['selectionMode'] == 'ALL'

    def test_request_interrupts_immediately(self):
        """Test the single action sends an interruption with no delay."""
        create_spot_interruption_template(self.mock_aws_fis, INSTANCE_ARN, ROLE_ARN)

        actions = self.mock_aws_fis.create_experiment_template.call_args.kwargs['actions']
        assert len(actions) == 1
        action = actions['actionSpot']
        assert action['actionId'] == 'aws:ec2:send-spot-instance-interruptions'
        assert action['parameters'] == {'durationBeforeInterruption': 'PT0M'}
        assert action['targets'] == {'SpotInstances': 'targetSpot'}

    def test_no_tags_without_name(self):
        """Test that tags are only sent when a name is given."""
        create_spot_interruption_template(self.mock_aws_fis, INSTANCE_ARN, ROLE_ARN)
        assert 'tags' not in self.mock_aws_fis.create_experiment_template.call_args.kwargs

        create_spot_interruption_template(self.mock_aws_fis, INSTANCE_ARN, ROLE_ARN, name='drill')
        assert self.mock_aws_fis.create_experiment_template.call_args.kwargs['tags'] == {
            'Name': 'drill'
        }

    def test_error_propagates(self):
        """Test that service errors are raised unchanged."""
        self.mock_aws_fis.create_experiment_template.side_effect = ClientError(
            {'Error': {'Code': 'ValidationException', 'Message': 'Invalid role ARN'}},
            'CreateExperimentTemplate',
        )

        with pytest.raises(ClientError, match='Invalid role ARN'):
            create_spot_interruption_template(self.mock_aws_fis, INSTANCE_ARN, 'invalid-role-arn')


class TestStartExperiment:
    """Test cases for start_experiment."""

    def test_start_experiment_success(self):
        """Test starting an experiment from a template."""
        mock_aws_fis = MagicMock()
        mock_aws_fis.start_experiment.return_value = {
            'experiment': {'id': 'EXP123', 'experimentTemplateId': 'abc123'}
        }

        result = start_experiment(mock_aws_fis, 'abc123')

        assert result == 'EXP123'
        mock_aws_fis.start_experiment.assert_called_once_with(experimentTemplateId='abc123')

    def test_start_experiment_with_name(self):
        """Test that a name is applied as the experiment's Name tag."""
        mock_aws_fis = MagicMock()
        mock_aws_fis.start_experiment.return_value = {'experiment': {'id': 'EXP123'}}

        start_experiment(mock_aws_fis, 'abc123', name='drill')

        mock_aws_fis.start_experiment.assert_called_once_with(
            experimentTemplateId='abc123', tags={'Name': 'drill'}
        )

    def test_start_experiment_error(self):
        """Test that service errors are raised unchanged."""
        mock_aws_fis = MagicMock()
        mock_aws_fis.start_experiment.side_effect = ClientError(
            {'Error': {'Code': 'ResourceNotFoundException', 'Message': 'Template not found'}},
            'StartExperiment',
        )

        with pytest.raises(ClientError, match='Template not found'):
            start_experiment(mock_aws_fis, 'abc123')
