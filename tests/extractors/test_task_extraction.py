"""
Unit tests for task step extraction.
"""

from ado_yaml.extractors import extract_tasks

STEPS = """\
steps:
- task: PowerShell@2
  displayName: 'Run script'
  inputs:
    targetType: inline
    script: |
      Write-Host "hello"
      exit: 0
    failOnStderr: true
    pwsh: 'false'
  condition: succeeded()

- script: echo between
- task: PublishBuildArtifacts@1
  inputs:
    pathToPublish: $(Build.ArtifactStagingDirectory)
    artifactName: drop
"""


class TestTaskExtraction:
    """Test cases for extract_tasks."""

    def test_tasks_with_display_name_and_inputs(self):
        tasks = extract_tasks(STEPS)

        assert [t.reference for t in tasks] == ["PowerShell@2", "PublishBuildArtifacts@1"]

        powershell = tasks[0]
        assert powershell.displayName == "Run script"
        assert powershell.inputs == {
            "targetType": "inline",
            "script": "|",
            "failOnStderr": True,
            "pwsh": False,
        }, f"Unexpected inputs: {powershell.inputs}"

    def test_keys_after_inputs_are_not_inputs(self):
        """Test that sibling keys following the inputs section are not read as inputs."""
        tasks = extract_tasks(STEPS)

        assert "condition" not in tasks[0].inputs

    def test_line_ranges_are_zero_based_and_end_at_last_content_line(self):
        tasks = extract_tasks(STEPS)

        assert (tasks[0].startLine, tasks[0].endLine) == (1, 10)
        assert (tasks[1].startLine, tasks[1].endLine) == (13, 16)

    def test_task_without_inputs(self):
        text = "steps:\n- task: NuGetToolInstaller@1\n- task: UseDotNet@2\n  displayName: Use .NET\n"

        tasks = extract_tasks(text)

        assert [t.name for t in tasks] == ["NuGetToolInstaller", "UseDotNet"]
        assert tasks[0].inputs == {}
        assert tasks[0].displayName is None
        assert tasks[1].displayName == "Use .NET"
        assert (tasks[0].startLine, tasks[0].endLine) == (1, 1)

    def test_nested_tasks_in_jobs(self, multi_stage_pipeline):
        tasks = extract_tasks(multi_stage_pipeline)

        assert len(tasks) == 1
        assert tasks[0].reference == "DotNetCoreCLI@2"
        assert tasks[0].displayName == "Build solution"
        assert tasks[0].inputs == {
            "command": "build",
            "projects": "**/*.csproj",
            "publishWebProjects": False,
        }

    def test_task_without_version_is_ignored(self):
        assert extract_tasks("steps:\n- task: NoVersion\n") == []

    def test_unstructured_input_yields_empty_list(self):
        assert extract_tasks("") == []
        assert extract_tasks("just some text\nno structure here") == []
