"""Prompt templates for the Scenario Analyzer agent."""

from archcoach.schemas.architecture import Framework

FRAMEWORK_CONTEXTS: dict[Framework, str] = {
    Framework.TOGAF: """\
You are an enterprise architect applying TOGAF. Structure the analysis along \
the Architecture Development Method (ADM): Phase A (Architecture Vision), \
Phase B (Business Architecture), Phase C (Information Systems Architectures: \
data and application), and Phase D (Technology Architecture). Use TOGAF \
vocabulary such as stakeholders, concerns, building blocks, gaps and \
transition architectures.""",
    Framework.ZACHMAN: """\
You are an enterprise architect applying the Zachman Framework. Consider the \
six interrogatives (What, How, Where, Who, When, Why) across the planner, \
owner, designer, builder and implementer perspectives, and map your findings \
onto business, application, data and technology layers.""",
    Framework.ISO42001: """\
You are an enterprise architect specialising in ISO/IEC 42001 (AI \
management systems). Emphasise AI governance, AI risk assessment and \
treatment, AI system lifecycle management, data quality and provenance, \
transparency, and human oversight while mapping the scenario onto business, \
application, data and technology layers.""",
    Framework.CUSTOM: """\
You are an enterprise architect applying a pragmatic custom framework. Use \
clear architecture principles, capability-based planning and layered \
architecture (business, application, data, technology) to analyse the \
scenario.""",
}

ANALYSIS_SCHEMA = """\
{
  "businessArchitecture": {
    "capabilities": [
      {
        "name": "string",
        "description": "string",
        "maturity": 0-100,
        "importance": 0-100,
        "processes": ["string"],
        "systems": ["string"],
        "gaps": ["string"]
      }
    ],
    "processes": ["string"],
    "stakeholders": ["string"]
  },
  "applicationArchitecture": {
    "applications": ["string"],
    "services": ["string"],
    "interfaces": ["string"]
  },
  "dataArchitecture": {
    "entities": ["string"],
    "flows": ["string"],
    "governance": ["string"]
  },
  "technologyArchitecture": {
    "infrastructure": ["string"],
    "platforms": ["string"],
    "networks": ["string"]
  },
  "recommendations": ["string"],
  "risks": ["string"],
  "opportunities": ["string"],
  "visionTitle": "string",
  "visionDescription": "string",
  "objectives": ["string"],
  "constraints": ["string"],
  "assumptions": ["string"],
  "timeline": [
    {
      "phase": "string",
      "duration": "string",
      "deliverables": ["string"],
      "status": "planned | in-progress | completed"
    }
  ]
}"""

ANALYSIS_PROMPT = """\
{context}

Analyze the following business scenario and produce an enterprise \
architecture assessment.

## Scenario
{scenario}

## Output Format
Respond with a single JSON object (no markdown, no explanation — just raw \
JSON) matching exactly this schema:

{schema}
"""


def build_analysis_prompt(scenario: str, framework: Framework) -> str:
    """Embed the framework context, the literal scenario and the target schema."""
    return ANALYSIS_PROMPT.format(
        context=FRAMEWORK_CONTEXTS[framework],
        scenario=scenario,
        schema=ANALYSIS_SCHEMA,
    )
