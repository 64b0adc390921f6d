"""
MCP resources describing the pipeline YAML subset the extractors understand.
"""

import logging

logger = logging.getLogger(__name__)


def register_mcp_resources(mcp_instance):
    """Register MCP resources that document the supported YAML subset."""

    @mcp_instance.resource("ado-yaml://user-guide/supported-syntax")
    def supported_syntax_guide():
        """Which pipeline YAML forms the extraction tools recognize."""
        return """# Pipeline YAML Extraction - Supported Syntax

The extraction tools read pipeline YAML line by line. They do not run a full
YAML parser, so templates, expressions and anchors are skipped rather than
rejected.

## Runtime parameters (`extract_pipeline_parameters`)

```yaml
parameters:
- name: environment
  displayName: Target environment
  type: string
  default: staging
  values:
  - staging
  - production
```

- Only the first `parameters:` block is read.
- `type` must be one of: string, boolean, number, object, step, stepList,
  job, jobList, deployment, deploymentList, stage, stageList, stringList.
  Anything else is reported as `string`.
- `default` is `true`/`false` for booleans and a number for numbers
  (unparseable numbers become 0). Object and list defaults are not read.
- Entries without `- name:` are skipped.
- Keys nested under a property, such as the steps of a `stepList` default,
  are not read as the parameter's own properties.
- Trailing `# comments` are removed from `name`, `type` and an otherwise
  empty `values:`. They are kept in `displayName` and `default`, so
  `default: true  # run tests` on a boolean reads as `false`. Put comments
  on their own line.
- A `#` inside a quoted name is part of the name.

## Stages (`extract_pipeline_stages`)

```yaml
stages:
- stage: Build
- stage: Deploy
  dependsOn: [Build, Test]
```

- `dependsOn` may be a single name, an inline list, or a block list.
- `dependsOn: []` and `dependsOn: null` are reported as no dependsOn key,
  the same as leaving it out.
- Dependency names are not checked against the stages found.

## Tasks (`extract_pipeline_tasks`)

- Steps written as `- task: Name@version` with `displayName` and the direct
  keys under `inputs:`. Line numbers are zero-based.
"""
