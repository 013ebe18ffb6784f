"""Rule-based synthesis of a research summary and recommendations."""

from .models import ResearchQuery, Resource

TOP_TITLES = 3
HIGH_ADOPTION_RELEVANCE = 0.8

WEB_RECOMMENDATION = "Focus on frameworks with strong web support and active maintenance"
API_RECOMMENDATION = "Prioritize libraries with good REST/GraphQL integration"
PERFORMANCE_RECOMMENDATION = "Evaluate performance benchmarks before implementation"
SECURITY_RECOMMENDATION = "Review security practices and vulnerability reports"
CLOSING_RECOMMENDATIONS = (
    "Set up automated testing and CI/CD pipeline",
    "Plan for regular dependency updates and security patches",
)


def _titles(resources: list[Resource]) -> str:
    return ", ".join(r.title for r in resources[:TOP_TITLES])


def summarize(query: ResearchQuery, repo_resources: list[Resource], doc_resources: list[Resource]) -> str:
    """Render the fixed summary template for a research call."""
    sections = [
        f"Research Summary for {query.technology}:",
        f"Based on analysis of {len(repo_resources)} repositories and {len(doc_resources)} documentation sources:",
        f"Popular repositories: {_titles(repo_resources)}\nKey documentation: {_titles(doc_resources)}",
    ]
    if query.purpose:
        sections.append(f"Purpose alignment: This technology appears well-suited for {query.purpose}")
    sections.append("The ecosystem shows active development with strong community support and comprehensive documentation.")
    return "\n\n".join(sections).strip()


def recommend(query: ResearchQuery, repo_resources: list[Resource]) -> list[str]:
    """Build recommendations in the order the rules fire."""
    recommendations: list[str] = []

    high_adoption = [r for r in repo_resources if r.relevance > HIGH_ADOPTION_RELEVANCE]
    if high_adoption:
        recommendations.append(f"Consider using {high_adoption[0].title} as it has high community adoption")

    purpose = query.purpose.lower()
    if "web" in purpose:
        recommendations.append(WEB_RECOMMENDATION)
    if "api" in purpose:
        recommendations.append(API_RECOMMENDATION)

    for constraint in query.constraints:
        constraint = constraint.lower()
        if "performance" in constraint:
            recommendations.append(PERFORMANCE_RECOMMENDATION)
        if "security" in constraint:
            recommendations.append(SECURITY_RECOMMENDATION)

    recommendations.extend(CLOSING_RECOMMENDATIONS)
    return recommendations
