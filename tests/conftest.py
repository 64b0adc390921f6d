"""Shared fixtures for pipeline YAML extraction tests."""

from pathlib import Path

import pytest

from tests.utils.telemetry import telemetry_setup  # noqa: F401

MULTI_STAGE_PIPELINE = """\
trigger:
  branches:
    include:
    - main

parameters:
- name: environment
  displayName: 'Target environment'
  type: string
  default: 'staging'
  values:
  - staging
  - production
- name: runTests
  displayName: Run tests
  type: boolean
  default: true
- name: retries
  type: number
  default: 3

variables:
  buildConfiguration: Release

stages:
- stage: Build
  jobs:
  - job: Compile
    steps:
    - task: DotNetCoreCLI@2
      displayName: 'Build solution'
      inputs:
        command: build
        projects: '**/*.csproj'
        publishWebProjects: false
- stage: Test
  dependsOn: Build
  jobs:
  - job: Unit
    steps:
    - script: dotnet test
- stage: Deploy
  dependsOn:
  - Build
  - Test
  jobs:
  - deployment: Web
    environment: ${{ parameters.environment }}
"""


@pytest.fixture
def multi_stage_pipeline() -> str:
    """A realistic multi-stage pipeline with parameters, stages and a task."""
    return MULTI_STAGE_PIPELINE


@pytest.fixture
def pipeline_file(tmp_path: Path) -> Path:
    """The multi-stage pipeline written to a temporary azure-pipelines.yml."""
    path = tmp_path / "azure-pipelines.yml"
    path.write_text(MULTI_STAGE_PIPELINE, encoding="utf-8")
    return path
