from enum import Enum

from pydantic import BaseModel, Field


class ParameterType(str, Enum):
    """
    Runtime parameter types accepted by Azure Pipelines.
    """

    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    OBJECT = "object"
    STEP = "step"
    STEP_LIST = "stepList"
    JOB = "job"
    JOB_LIST = "jobList"
    DEPLOYMENT = "deployment"
    DEPLOYMENT_LIST = "deploymentList"
    STAGE = "stage"
    STAGE_LIST = "stageList"
    STRING_LIST = "stringList"

    @classmethod
    def parse(cls, value: str) -> "ParameterType":
        """
        Resolve a declared type, falling back to string for anything unrecognized.

        Args:
            value (str): The raw value of a `type:` line.

        Returns:
            ParameterType: The matching member, or STRING.
        """
        try:
            return cls(value)
        except ValueError:
            return cls.STRING


class ParameterDeclaration(BaseModel):
    """
    Represents a runtime parameter declared in a pipeline's `parameters:` block.
    """

    name: str
    type: ParameterType = ParameterType.STRING
    displayName: str | None = None
    default: bool | float | str | None = None
    values: list[str] | None = None

    model_config = {"use_enum_values": True}

    def has_choices(self) -> bool:
        """
        Check if the parameter restricts input to an enumerated set.

        Returns:
            bool: True if a non-empty values list was declared.
        """
        return bool(self.values)


class StageNode(BaseModel):
    """
    Represents a stage and the stages it depends on.

    A dependsOn of None means the pipeline did not declare dependencies, so the
    consumer applies its own default (sequential on the previous stage).
    """

    name: str
    dependsOn: list[str] | None = None


class TaskReference(BaseModel):
    """
    Represents a `- task: Name@version` step and its inputs.
    """

    name: str
    version: str
    displayName: str | None = None
    inputs: dict[str, bool | str] = Field(default_factory=dict)
    startLine: int
    endLine: int

    @property
    def reference(self) -> str:
        """The task reference as written in YAML, e.g. `PowerShell@2`."""
        return f"{self.name}@{self.version}"


class PipelineOutline(BaseModel):
    """
    Everything the extractors recover from a single pipeline definition.
    """

    parameters: list[ParameterDeclaration] = Field(default_factory=list)
    stages: list[StageNode] = Field(default_factory=list)
    tasks: list[TaskReference] = Field(default_factory=list)


class RunOptions(BaseModel):
    """
    Options for queuing a pipeline run, shaped like the Runs API request body.
    """

    branch: str | None = None
    templateParameters: dict[str, str] | None = None
    stagesToSkip: list[str] | None = None
