"""Prompts and canned replies for the Strategy Coach agent."""

from archcoach.schemas.architecture import Framework

QUESTION_PROMPT = """\
You are an AI strategy coach for enterprise architects, specialised in the \
{framework} framework. Answer the question below in at most three short \
paragraphs of plain text. Be concrete and reference {framework} concepts \
where they help.

Question: {question}
"""

FALLBACK_ANSWERS: dict[Framework, str] = {
    Framework.TOGAF: (
        "Based on TOGAF ADM principles, I recommend focusing on Phase A "
        "(Architecture Vision) to establish clear stakeholder buy-in. The current "
        "analysis suggests strong alignment with business architecture layers, but "
        "we should validate the information systems architecture against your "
        "enterprise continuum."
    ),
    Framework.ZACHMAN: (
        "From a Zachman Framework perspective, this maps well to the 'What' and "
        "'How' dimensions at the Business Model level. Consider expanding the "
        "analysis to include the 'Where' and 'When' perspectives to ensure "
        "comprehensive coverage of your enterprise architecture."
    ),
    Framework.ISO42001: (
        "Regarding ISO 42001 compliance, the current approach demonstrates good AI "
        "governance practices. However, I'd recommend strengthening the risk "
        "management framework and ensuring proper documentation of AI system "
        "lifecycle management processes."
    ),
    Framework.CUSTOM: (
        "Based on your custom framework, this aligns well with your defined "
        "architecture principles. The capability mapping shows strong maturity in "
        "core business functions, with opportunities for enhancement in digital "
        "transformation areas."
    ),
}

WELCOME_MESSAGE = (
    "Hello! I'm your AI Strategy Coach, specialized in {framework} framework. I can "
    "help you analyze architectural decisions, align strategies with business "
    "capabilities, and provide governance insights. What would you like to "
    "explore today?"
)

SUGGESTED_QUESTIONS = [
    "How does this align with our business capabilities?",
    "What TOGAF ADM phase should we focus on?",
    "Are there any stakeholder concerns missing?",
    "What compliance gaps should we address?",
    "How can we improve our architecture maturity?",
]
