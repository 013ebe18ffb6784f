"""Markdown rendering of research results."""

from .models import ResearchQuery, ResearchResult


def render_markdown(query: ResearchQuery, result: ResearchResult) -> str:
    """Render a result as a markdown report."""
    lines = [f"# Research Report: {query.technology}", "", result.summary, ""]

    if result.recommendations:
        lines.append("## Recommendations")
        lines.append("")
        lines.extend(f"{i}. {rec}" for i, rec in enumerate(result.recommendations, 1))
        lines.append("")

    if result.resources:
        lines.append("## Resources")
        lines.append("")
        for resource in result.resources:
            lines.append(f"- [{resource.title}]({resource.url}) ({resource.type.value}, relevance {resource.relevance:.2f})")
        lines.append("")

    if result.code_examples:
        lines.append("## Code Examples")
        for example in result.code_examples:
            lines.append("")
            lines.append(f"### {example.description}")
            lines.append(f"Source: {example.source}")
            lines.append("")
            lines.append(f"```{example.language}")
            lines.append(example.code)
            lines.append("```")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
