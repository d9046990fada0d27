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
"""Shared pytest fixtures."""

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop any sinks added by a test so they do not outlive its captured streams."""
    yield
    logger.remove()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep ambient AWS and log settings from leaking into tests."""
    monkeypatch.delenv('AWS_REGION', raising=False)
    monkeypatch.delenv('AWS_PROFILE', raising=False)
    monkeypatch.delenv('EC2_SPOT_INTERRUPTER_LOG_LEVEL', raising=False)
