from workflow.errors import UnsupportedLanguage

SUPPORTED_LANGUAGES = {
    "vi": "Vietnamese",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "fr": "French",
    "de": "German",
    "es": "Spanish",
    "pt": "Portuguese",
}

REVIEW_SECTIONS = (
    "1. Changes:",
    "2. Impact:",
    "3. Clean code:",
    "4. Performance:",
    "5. Other:",
)


def validate_language(code):
    if code and code not in SUPPORTED_LANGUAGES:
        raise UnsupportedLanguage(code, SUPPORTED_LANGUAGES)
    return code


def translation_instruction(code):
    if not code:
        return ""
    validate_language(code)
    name = SUPPORTED_LANGUAGES[code]
    return (
        f"After each English section, provide {name} translation in the same format. "
        f"Use format: [ENGLISH CONTENT] followed by [{name.upper()} CONTENT]."
    )


def _fenced(title, body, language=""):
    return f"{title}:\n```{language}\n{body}\n```"


def _endpoint_guidance(has_evidence):
    if has_evidence:
        return [
            "  - Use the API ENDPOINT ANALYSIS section above as the primary source for endpoint information",
            "  - Format each endpoint as: METHOD /path - Brief description",
            "  - Example: POST /customer-products/:id/analysis - Generates new AI analysis",
            "  - Example: GET /customer-products/:id/analysis - Retrieves AI analysis result",
            "  - Do not include code quotes or technical details, only the clean endpoint format",
            '  - If analysis shows no changes, state: "No API endpoint changes detected"',
        ]
    return [
        "  - CRITICAL INSTRUCTION: ONLY extract endpoints that you can see EXPLICITLY in the Git diff of routes.go files",
        "  - Format each endpoint as: METHOD /path - Brief description",
        "  - Example: POST /customer-products/:id/analysis - Generates new AI analysis",
        "  - Example: GET /customer-products/:id/analysis - Retrieves AI analysis result",
        "  - Do not include code quotes or technical details, only the clean endpoint format",
        "  - If you cannot see the exact route definition in the provided Git diff, DO NOT list any endpoints",
        '  - If no route changes are visible in the diff, state: "No API endpoint changes detected"',
    ]


def _output_format(has_conventions, has_evidence):
    changes, impact, clean_code, performance, other = REVIEW_SECTIONS
    lines = [
        changes,
        "- Commits:",
        "  [List key commits with brief description]",
        "- Files:",
        "  [List main file categories and their purpose]",
        "- Summary:",
        "  - Scope: [Describe the scope based on number of files and areas affected]",
        "  - Complexity: [Low/Medium/High - assess technical complexity]",
        "  - Risk Level: [Low/Medium/High - assess deployment and operational risks]",
        "  - Deployment Impact: [Describe coordination requirements and potential issues]",
    ]
    if has_conventions:
        lines += [
            "- Convention Violations:",
            "  - List specific code changes that violate team conventions with file names and line references",
            "  - Example: \"gw/service.go: Function 'processData' uses snake_case instead of camelCase (violates Go Guidelines)\"",
            '  - Example: "sss/repository.go: Missing error handling for database operation (violates error handling convention)"',
            '  - If no violations found, state: "No major convention violations detected"',
        ]
    lines += [
        "",
        impact,
        "[Provide comprehensive analysis of system impact. Include detailed breakdown:]",
        "- API Endpoints:",
        *_endpoint_guidance(has_evidence),
        "- Database Changes:",
        "  - New tables: List all newly created tables with key columns",
        "  - Table alterations: Detail ALTER TABLE statements and column changes",
        "  - Migrations: List migration files and their purposes",
        "  - Indexes: Any new indexes or constraints added",
        "- Microservices Impact:",
        "  - Primary services: Which services contain the main changes",
        "  - Secondary services: Which services are affected by integration",
        "  - Data flow: How data flows between affected services",
        "  - Service dependencies: New or changed service-to-service calls",
        "- Dependencies & Libraries:",
        "  - New external libraries: List added dependencies",
        "  - Version updates: Any library version changes",
        "  - Configuration changes: New environment variables or configs",
        "- Breaking Changes:",
        "  - API compatibility: Any backwards incompatible API changes",
        "  - Database schema: Schema changes that affect existing data",
        "  - Client impact: How changes affect frontend/mobile clients",
        "  - Deployment considerations: Rolling update compatibility",
        "",
        clean_code,
        "[List specific code quality issues with examples]",
        "",
        performance,
        "[Identify performance concerns and optimization opportunities]",
        "",
        other,
        "[Security, testing, documentation, deployment concerns]",
    ]
    return lines


def build_review_prompt(
    current_branch,
    target_branch,
    commit_list,
    changed_files,
    diff_presentation,
    convention=None,
    endpoint_evidence=None,
    language=None,
):
    """Assemble the review request sent to the AI CLI.

    ``endpoint_evidence`` is embedded only when it holds real matches; the
    "no changes" placeholder never reaches the prompt.
    """
    has_conventions = bool(convention and convention.strip())
    has_evidence = endpoint_evidence is not None and endpoint_evidence.found
    instruction = translation_instruction(language)

    parts = [
        f"Please review this code changes from branch '{current_branch}' "
        f"compared to '{target_branch}'.",
        f"COMMITS:\n{commit_list or 'No commits found'}",
        "CHANGED FILES:\n" + "\n".join(changed_files),
    ]
    if has_conventions:
        parts.append(_fenced("TEAM CONVENTIONS", convention.strip()))
    if has_evidence:
        parts.append(_fenced("API ENDPOINT ANALYSIS", endpoint_evidence.render()))
    parts.append(_fenced("GIT DIFF", diff_presentation.render(), language="diff"))

    directives = [
        "Please provide a concise code review following EXACTLY this format. "
        "Be brief and specific."
    ]
    if instruction:
        directives.append(instruction)
    if has_conventions:
        directives.append(
            "IMPORTANT: Since team conventions are provided, carefully analyze the code "
            "changes against these conventions and identify specific violations in the "
            "Convention Violations section. Look for naming conventions, code structure, "
            "testing requirements, documentation standards, etc."
        )
    if has_evidence:
        directives.append(
            "IMPORTANT: Use the API ENDPOINT ANALYSIS section above to accurately identify "
            "new, modified, or deleted API endpoints. Do not guess or infer endpoints - "
            "only use what is explicitly shown in the analysis."
        )
    parts.append("\n".join(directives))
    parts.append("\n".join(_output_format(has_conventions, has_evidence)))
    parts.append(
        "Keep responses detailed for Impact section, concise for others. "
        "Focus on actionable insights."
    )
    return "\n\n".join(parts) + "\n"


__all__ = [
    "SUPPORTED_LANGUAGES",
    "REVIEW_SECTIONS",
    "validate_language",
    "translation_instruction",
    "build_review_prompt",
]
