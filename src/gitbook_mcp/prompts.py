"""Reusable prompt templates for working with GitBook documentation."""

from mcp.server.fastmcp import FastMCP

from gitbook_mcp.config import GitBookConfig, resolve_identifier


def _steps(*steps: str) -> str:
    return "\n".join(f"{number}. {step}" for number, step in enumerate(steps, start=1))


def register_prompts(server: FastMCP, config: GitBookConfig) -> None:
    """Register prompt templates with the MCP server.

    Prompts that take a ``space_id`` fall back to the configured default space.
    """

    def space(space_id: str | None) -> str:
        return resolve_identifier(space_id, config.space_id, "space_id")

    @server.prompt(
        name="fetch_documentation",
        description="Fetch and analyze GitBook documentation about a topic",
    )
    def fetch_documentation(
        topic: str, space_id: str | None = None, include_structure: bool = False
    ) -> str:
        steps = [
            f'Search for content related to "{topic}" in the GitBook space',
            "Retrieve the most relevant pages",
            "Analyze the content for completeness and accuracy",
            "Identify any related pages or sections I should also review",
        ]
        if include_structure:
            steps.append("Show me the overall space structure to understand context")
        return (
            "I need to fetch and analyze GitBook documentation content.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**Topic**: {topic}\n"
            f"**Include Structure**: {include_structure}\n\n"
            f"Please help me:\n{_steps(*steps)}\n\n"
            "Start by using the search_content tool to find relevant pages, "
            "then use get_page_content to retrieve the actual content for analysis."
        )

    @server.prompt(
        name="analyze_content_structure",
        description="Analyze how the content of a GitBook space is organized",
    )
    def analyze_content_structure(
        space_id: str | None = None, analysis_type: str = "overview"
    ) -> str:
        return (
            "I need to analyze the content structure of a GitBook space.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**Analysis Type**: {analysis_type}\n\n"
            "Please help me:\n"
            + _steps(
                "Get the complete space structure and content overview",
                "Analyze the documentation organization and hierarchy",
                "Identify the main topics and sections covered",
                "Assess the logical flow and navigation structure",
                "Highlight any organizational issues or improvements needed",
            )
            + "\n\nStart by using get_space_content to understand the overall organization."
        )

    @server.prompt(
        name="analyze_content_gaps",
        description="Find missing or incomplete documentation in a GitBook space",
    )
    def analyze_content_gaps(
        space_id: str | None = None, comparison_source: str = "internal analysis"
    ) -> str:
        return (
            "I need to analyze GitBook content for gaps and missing documentation.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**Comparison Source**: {comparison_source}\n\n"
            "Please help me:\n"
            + _steps(
                "Get the complete space structure and content overview",
                "Analyze the documentation for missing topics or incomplete sections",
                "Identify gaps in coverage for common user needs",
                "Suggest new content that should be added",
                "Prioritize gaps by importance and user impact",
            )
            + "\n\nStart by using get_space_content, then examine key pages "
            "with get_page_content to understand what's covered."
        )

    @server.prompt(
        name="content_audit",
        description="Audit GitBook content for quality and consistency",
    )
    def content_audit(
        space_id: str | None = None,
        audit_criteria: str = "general quality and consistency",
    ) -> str:
        return (
            "I need to perform a comprehensive audit of GitBook content.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**Audit Criteria**: {audit_criteria}\n\n"
            "Please help me:\n"
            + _steps(
                "Review the space structure for logical organization",
                "Examine content quality, accuracy, and consistency",
                "Check for outdated information or broken references",
                "Evaluate writing style and clarity",
                "Identify content that needs updating or removal",
                "Provide recommendations for improvement",
            )
            + "\n\nStart by getting the space structure, then systematically review "
            "key pages for the specified criteria."
        )

    @server.prompt(
        name="documentation_summary",
        description="Summarize the content of a GitBook space",
    )
    def documentation_summary(
        space_id: str | None = None, summary_type: str = "overview"
    ) -> str:
        return (
            "I need to generate a summary of GitBook space content.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**Summary Type**: {summary_type}\n\n"
            "Please help me:\n"
            + _steps(
                "Get the complete space structure and key pages",
                "Analyze the main topics and themes covered",
                f"Create a {summary_type} summary of the content",
                "Highlight the most important sections and information",
                "Identify the scope and purpose of the documentation",
            )
            + "\n\nStart by using get_space_content, then examine key pages "
            "to understand the overall coverage."
        )

    @server.prompt(
        name="update_documentation_plan",
        description="Plan updates to the documentation in a GitBook space",
    )
    def update_documentation_plan(
        update_goals: str,
        space_id: str | None = None,
        target_audience: str = "general users",
    ) -> str:
        return (
            "I need to create a plan for updating GitBook documentation.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**Update Goals**: {update_goals}\n"
            f"**Target Audience**: {target_audience}\n\n"
            "Please help me:\n"
            + _steps(
                "Analyze the current space structure and content",
                "Identify pages that need updates based on my goals",
                "Create a prioritized update plan",
                "Suggest content improvements and new sections needed",
                "Recommend best practices for the target audience",
            )
            + "\n\nStart by getting the space content structure, then analyze "
            "relevant pages to understand the current state."
        )

    @server.prompt(
        name="api_documentation_generator",
        description="Generate or update API reference documentation in a GitBook space",
    )
    def api_documentation_generator(
        api_type: str,
        space_id: str | None = None,
        source_format: str = "manual analysis",
        endpoint_focus: str = "comprehensive coverage",
    ) -> str:
        return (
            "I need to generate or update API documentation in GitBook.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**API Type**: {api_type}\n"
            f"**Source Format**: {source_format}\n"
            f"**Endpoint Focus**: {endpoint_focus}\n\n"
            "Please help me:\n"
            + _steps(
                "Analyze the current documentation structure for API content",
                f"Create or update {api_type} API documentation sections",
                "Generate comprehensive endpoint documentation with examples",
                "Include authentication, error handling, and best practices",
                "Create interactive examples and use cases",
                "Ensure documentation follows API documentation best practices",
                "Add proper code samples and response examples",
            )
            + "\n\nStart by reviewing the space structure and existing API content, "
            f"then systematically build comprehensive {api_type} documentation."
        )

    @server.prompt(
        name="content_optimization",
        description="Plan SEO, readability or structure improvements for a GitBook space",
    )
    def content_optimization(
        optimization_type: str,
        space_id: str | None = None,
        target_metrics: str = "general improvement",
    ) -> str:
        return (
            f"I need to optimize GitBook content for better {optimization_type}.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**Optimization Type**: {optimization_type}\n"
            f"**Target Metrics**: {target_metrics}\n\n"
            "Please help me:\n"
            + _steps(
                f"Analyze current content for {optimization_type} opportunities",
                "Identify pages that need optimization work",
                f"Suggest specific improvements for {optimization_type}",
                "Prioritize changes by impact and effort required",
                "Create an optimization plan with measurable goals",
                f"Implement best practices for {optimization_type}",
                "Track and measure improvement results",
            )
            + "\n\nStart by reviewing the space structure and content to assess "
            f"current {optimization_type} status."
        )

    @server.prompt(
        name="quality_assurance_check",
        description="Check a GitBook space for broken links, formatting and consistency issues",
    )
    def quality_assurance_check(
        check_type: str,
        space_id: str | None = None,
        severity: str = "important",
    ) -> str:
        return (
            "I need to perform quality assurance checks on GitBook content.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**Check Type**: {check_type}\n"
            f"**Severity Focus**: {severity}\n\n"
            "Please help me:\n"
            + _steps(
                f"Systematically review content for {check_type} issues",
                "Identify and categorize problems by severity",
                "Check for broken links, formatting errors, and inconsistencies",
                "Validate content accuracy and completeness",
                "Review style guide compliance and consistency",
                "Generate a detailed QA report with actionable items",
                "Prioritize fixes based on user impact",
            )
            + "\n\nStart by analyzing the space structure and then perform "
            f"comprehensive {check_type} quality checks."
        )

    @server.prompt(
        name="troubleshooting_assistant",
        description="Diagnose access, content or integration problems in a GitBook space",
    )
    def troubleshooting_assistant(
        issue_type: str,
        space_id: str | None = None,
        description: str = "to be investigated",
    ) -> str:
        return (
            "I need help troubleshooting GitBook issues.\n\n"
            f"**Space ID**: {space(space_id)}\n"
            f"**Issue Type**: {issue_type}\n"
            f"**Problem Description**: {description}\n\n"
            "Please help me:\n"
            + _steps(
                f"Diagnose the {issue_type} issue by examining relevant space data",
                "Identify potential causes and contributing factors",
                "Check permissions and configuration of the space",
                "Gather diagnostic information from the affected pages",
                "Provide step-by-step troubleshooting procedures",
                "Suggest preventive measures to avoid future issues",
                "Document the resolution process for reference",
            )
            + "\n\nStart by investigating the current state and gathering "
            f"information about the {issue_type} issue."
        )
