"""
Prompts for the AI reviewer.
"""

from langchain_core.prompts import PromptTemplate

# Asks for a single-line security verdict so the reply can be parsed on its
# leading PASS:/FAIL: token.
CODE_REVIEW_PROMPT = PromptTemplate.from_template(
    """You are an AI code reviewer for a FiveM server project. Review the following code changes and provide a security and safety assessment.

Focus on:
1. Security vulnerabilities (SQL injection, XSS, unsafe file operations)
2. FiveM-specific issues (resource conflicts, performance problems)
3. Breaking changes that could crash the server
4. Malicious code or backdoors

Files changed: {files}

Code diff:
{diff}

Respond with either:
- "PASS: [brief reason]" if the changes are safe
- "FAIL: [specific security concern]" if there are issues

Keep your response concise (max 200 characters)."""
)
