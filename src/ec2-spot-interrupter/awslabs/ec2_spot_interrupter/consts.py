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

"""Constants for the EC2 spot interrupter."""

# AWS services
SERVICE_FIS = 'fis'

# AWS client configuration
AWS_CONFIG_SIGNATURE_VERSION = 'v4'
DEFAULT_AWS_REGION = 'us-east-1'

# Environment variables
ENV_AWS_REGION = 'AWS_REGION'
ENV_LOG_LEVEL = 'EC2_SPOT_INTERRUPTER_LOG_LEVEL'
DEFAULT_LOG_LEVEL = 'INFO'

# Experiment template contents
TEMPLATE_DESCRIPTION = 'Created by ec2-spot-interrupter tool'
STOP_CONDITION_SOURCE_NONE = 'none'
SPOT_RESOURCE_TYPE = 'aws:ec2:spot-instance'
SPOT_SELECTION_MODE = 'ALL'
SPOT_TARGET_NAME = 'targetSpot'
SPOT_ACTION_NAME = 'actionSpot'
SPOT_ACTION_ID = 'aws:ec2:send-spot-instance-interruptions'
SPOT_ACTION_TARGET_KEY = 'SpotInstances'
INTERRUPTION_DELAY_PARAM = 'durationBeforeInterruption'
INTERRUPTION_DELAY_IMMEDIATE = 'PT0M'
