"""
Estimation prompt construction and model selection.

``project_data`` is the raw questionnaire posted by the estimation form. The
sections read here are ``basics``, ``constraints``, ``clientInfo``,
``features``, ``functionalities``, ``objectives`` and ``deliverables``; any of
them may be missing.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, List

FREELANCE = "freelance"
ENTREPRISE = "entreprise"
USER_TYPES = (FREELANCE, ENTREPRISE)

GPT_4 = "gpt-4"
GPT_35_TURBO = "gpt-3.5-turbo"
COMPLEXITY_THRESHOLD = 8

COMPLEX_FEATURES = frozenset(
    {
        "auth-sso",
        "api-integration",
        "ecommerce",
        "roles-permissions",
        "erp-crm",
        "gdpr-security",
        "automated-tests",
    }
)
HEAVY_PROJECT_TYPES = frozenset({"saas", "e-commerce", "api"})
MEDIUM_PROJECT_TYPES = frozenset({"dashboard", "app-mobile"})

CLIENT_TYPE_LABELS = {
    "startup": "Startup / young company",
    "pme": "SME (10-250 employees)",
    "grande-entreprise": "Large company (250+ employees)",
    "association": "Non-profit / NGO",
    "particulier": "Private individual",
}

BUDGET_RANGE_LABELS = {
    "low": "< 5,000 EUR",
    "medium": "5,000 EUR - 15,000 EUR",
    "high": "15,000 EUR - 50,000 EUR",
    "enterprise": "50,000 EUR+",
}

COMPETITIVE_CONTEXT_LABELS = {
    "low": "Little competition",
    "medium": "Moderate competition",
    "high": "Strong competition",
}


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


def _as_text(value: Any, default: str) -> str:
    if value is None or value == "" or value == []:
        return default
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def selected_features(data: Dict[str, Any], user_type: str) -> List[str]:
    """Features picked in the questionnaire section matching ``user_type``."""
    section = _section(data, "features" if user_type == FREELANCE else "functionalities")
    features = section.get("selectedFeatures") or []
    return list(features) if isinstance(features, (list, tuple)) else []


def client_type_label(value: str) -> str:
    return CLIENT_TYPE_LABELS.get(value, value)


def budget_range_label(value: str) -> str:
    return BUDGET_RANGE_LABELS.get(value, value)


def competitive_context_label(value: str) -> str:
    return COMPETITIVE_CONTEXT_LABELS.get(value, value)


def calculate_complexity(data: Dict[str, Any], user_type: str) -> int:
    """Score the project; higher scores are routed to the larger model."""
    score = 0
    for feature in selected_features(data, user_type):
        score += 2 if feature in COMPLEX_FEATURES else 1

    basics = _section(data, "basics")
    project_type = str(basics.get("projectType") or "").lower()
    if project_type in HEAVY_PROJECT_TYPES:
        score += 3
    elif project_type in MEDIUM_PROJECT_TYPES:
        score += 2

    technologies = basics.get("technologies")
    tech_count = 0
    if isinstance(technologies, (list, tuple, dict)):
        tech_count = len(technologies)
    elif technologies:
        tech_count = str(technologies).count(",") + 1
    if tech_count > 3:
        score += 2

    if user_type == ENTREPRISE:
        functionalities = _section(data, "functionalities")
        if functionalities.get("scalability") == "yes":
            score += 2
        complexity = functionalities.get("functionalComplexity")
        if complexity == "very-complex":
            score += 3
        elif complexity == "complex":
            score += 2
    return score


def select_model(complexity_score: int) -> str:
    return GPT_4 if complexity_score > COMPLEXITY_THRESHOLD else GPT_35_TURBO


def cache_key(data: Dict[str, Any], user_type: str) -> str:
    """md5 of the fields that determine an estimation, stable under key and feature order."""
    basics = _section(data, "basics")
    is_freelance = user_type == FREELANCE
    key_data = {
        "userType": user_type,
        "projectType": basics.get("projectType", ""),
        "technologies": basics.get("technologies", ""),
        "features": sorted(str(f) for f in selected_features(data, user_type)),
        "tjm": _section(data, "constraints").get("tjmTarget", 0) if is_freelance else 0,
        "budget": 0 if is_freelance else _section(data, "objectives").get("budgetAmount", 0),
        "complexity": "" if is_freelance else _section(data, "functionalities").get("functionalComplexity", ""),
    }
    encoded = json.dumps(key_data, sort_keys=True, ensure_ascii=False, default=str)
    return hashlib.md5(encoded.encode("utf-8")).hexdigest()


def build_prompt(data: Dict[str, Any], user_type: str) -> str:
    if user_type == FREELANCE:
        return build_freelance_prompt(data)
    return build_enterprise_prompt(data)


_FREELANCE_STRUCTURE = {
    "estimation": {
        "totalDays": 0,
        "totalCost": 0,
        "confidence": "high|medium|low",
        "breakdown": {
            "analysis": {"days": 0, "cost": 0, "description": "Requirements analysis and specifications"},
            "design": {"days": 0, "cost": 0, "description": "UI/UX design and mockups"},
            "development": {"days": 0, "cost": 0, "description": "Feature development"},
            "testing": {"days": 0, "cost": 0, "description": "Testing and fixes"},
            "deployment": {"days": 0, "cost": 0, "description": "Go-live and configuration"},
        },
        "recommendations": [
            "Plan intermediate validation points with the client",
            "Document deliverables to ease maintenance",
        ],
        "risks": [
            "Incomplete specifications that may extend the schedule",
            "Last-minute changes in requirements",
        ],
        "freelanceAnalysis": {
            "type": "tjm_justification|profitability_analysis",
            "title": "Daily rate justification|Profitability analysis",
            "summary": "Summary of the analysis",
            "details": {
                "factor1": "First analysis factor",
                "factor2": "Second analysis factor",
                "factor3": "Third analysis factor",
            },
            "conclusion": "Final conclusion",
            "status": "justified|profitable|risky|unprofitable",
        },
    }
}

_ENTERPRISE_STRUCTURE = {
    "estimation": {
        "totalDays": 0,
        "totalCost": 0,
        "confidence": "high|medium|low",
        "breakdown": {
            "analysis": {"days": 0, "cost": 0, "description": "Requirements analysis and architecture"},
            "design": {"days": 0, "cost": 0, "description": "UI/UX design and prototyping"},
            "development": {"days": 0, "cost": 0, "description": "Feature development"},
            "testing": {"days": 0, "cost": 0, "description": "Testing and quality assurance"},
            "management": {"days": 0, "cost": 0, "description": "Project management and coordination"},
        },
        "recommendations": [
            "Use an agile methodology with two-week sprints",
            "Schedule user testing during development",
        ],
        "risks": [
            "Underestimated technical complexity",
            "Scope changes during the project",
        ],
    }
}


def build_freelance_prompt(data: Dict[str, Any]) -> str:
    """Compact prompt for a freelance, in its fixed-price (forfait) or time-and-materials (regie) variant."""
    basics = _section(data, "basics")
    constraints = _section(data, "constraints")
    client_info = _section(data, "clientInfo")
    deliverables = _section(data, "deliverables")
    objectives = _section(data, "objectives")
    freelance_type = constraints.get("freelanceType") or "forfait"
    regie = freelance_type == "regie"

    lines: List[str] = []
    if regie:
        lines.append(
            "You are a senior expert in estimating web projects delivered by freelancers on a TIME-AND-MATERIALS "
            "basis. You must provide a **realistic, well-argued** estimate based on a daily rate and the time required."
        )
    else:
        lines.append(
            "You are a senior expert in FIXED-PRICE freelance commercial pricing. You must provide a **realistic and "
            "competitive recommended fixed selling price** for the client."
        )
    lines.append("")
    lines.append("You answer in **strict JSON**, exactly in the structure given below.")
    lines.append("")

    lines.append("### Context:")
    lines.append(f"- Project type: {_as_text(basics.get('projectType'), 'Not specified')}")
    lines.append(f"- Description: {_as_text(basics.get('description'), 'Redesign/evolution')}")
    lines.append(f"- Technologies: {_as_text(basics.get('technologies'), 'Not specified')}")

    if constraints:
        lines.append(f"- Availability: {'Full time' if constraints.get('isFullTime') else 'Part time'}")
        if regie:
            if constraints.get("tjmTarget") is not None:
                lines.append(f"- Target daily rate: {constraints['tjmTarget']} EUR/day")
            if constraints.get("securityMargin") is not None:
                lines.append(f"- Safety margin: {constraints['securityMargin']}%")
        else:
            if client_info.get("clientType"):
                lines.append(f"- Client type: {client_type_label(client_info['clientType'])}")
            if client_info.get("clientBudgetRange"):
                lines.append(f"- Indicative budget: {budget_range_label(client_info['clientBudgetRange'])}")
            if client_info.get("competitiveContext"):
                lines.append(
                    f"- Competitive context: {competitive_context_label(client_info['competitiveContext'])}"
                )

    features = selected_features(data, FREELANCE)
    if features:
        lines.append(f"- Features: {', '.join(map(str, features))}")
    selected_objectives = objectives.get("selectedObjectives") or []
    if selected_objectives:
        lines.append(f"- Objectives: {', '.join(map(str, selected_objectives))}")

    lines.append("")
    lines.append("### Constraints:")
    lines.append("- You must include time for design, testing and deployment")
    if deliverables.get("mockupsProvided") is False:
        lines.append("- Mockups must be created (add design time)")
    if deliverables.get("specsStatus") == "to-define":
        lines.append("- Specifications still to be defined (add analysis time)")
    if regie:
        lines.append("- Be realistic: a complete WordPress project is not done in 5 days")
        lines.append("- Include the safety margin if specified")
        lines.append("")
        lines.append("### TIME-AND-MATERIALS billing (daily rate x time):")
        lines.append("- Base the estimate on a realistic market daily rate")
        lines.append("- Startup/SME: 400-600 EUR/day")
        lines.append("- Large company: 600-800 EUR/day")
        lines.append("- Compute the required time precisely")
        lines.append("- Transparent billing: daily rate x days")
        lines.append("- The client pays for the time spent")
    else:
        lines.append("- Use market price benchmarks for the client type")
        lines.append("- Include an appropriate commercial margin (30-50%)")
        lines.append("- Adjust according to the competitive context")
        lines.append("")
        lines.append("### FIXED PRICE (market price):")
        lines.append("- Complete WordPress site: 8k-15k EUR depending on complexity")
        lines.append("- E-commerce: 10k-25k EUR depending on features")
        lines.append("- Web application: 15k-50k EUR depending on scope")
        lines.append("- Negotiated fixed price, independent of time")
        lines.append("- Include a commercial margin (30-50%)")

    lines.append("")
    lines.append("### JSON answer structure:")
    lines.append("```json")
    lines.append(json.dumps(_FREELANCE_STRUCTURE, indent=4, ensure_ascii=False))
    lines.append("```")
    lines.append("")
    lines.append("**IMPORTANT:**")
    lines.append("- Never change the JSON structure")
    lines.append("- The sum of the days of every phase must equal totalDays")
    lines.append('- If a value is unknown, use "description": "Not specified" or "cost": 0')
    lines.append("- Give recommendations and risks specific to the project")

    if regie:
        lines.append("- The cost must reflect daily rate x time, with transparent billing")
        lines.append("")
        lines.append("### TIME-AND-MATERIALS ANALYSIS - Daily rate justification:")
        lines.append("In freelanceAnalysis, give a detailed justification of the daily rate:")
        lines.append("- type: 'tjm_justification'")
        lines.append("- title: 'Justification of your daily rate'")
        lines.append("- summary: One sentence explaining why the daily rate is justified")
        lines.append("- details: {")
        lines.append("    'complexity': 'Technical complexity: [level] - [short explanation]',")
        lines.append("    'technologies': 'Technologies: [type] - [justification]',")
        lines.append("    'experience': 'Required experience: [level] - [why]',")
        lines.append("    'market': 'Market: [daily rate range] for this profile'")
        lines.append("  }")
        lines.append("- conclusion: 'Your daily rate of [X] EUR/day is [status] because [main reason]'")
        lines.append("- status: 'justified|undervalued|overvalued'")
    else:
        lines.append("- The cost must reflect a competitive market FIXED SELLING PRICE")
        lines.append("")
        lines.append("### FIXED-PRICE ANALYSIS - Profitability:")
        lines.append("In freelanceAnalysis, give an effort versus profitability analysis:")
        lines.append("- type: 'profitability_analysis'")
        lines.append("- title: 'Effort vs profitability analysis'")
        lines.append("- summary: One sentence summarising the profitability of the project")
        lines.append("- details: {")
        lines.append("    'effort': 'Estimated effort: [X] days of actual work',")
        lines.append("    'price': 'Fixed price: [X] EUR negotiated with the client',")
        lines.append("    'tjm_implicit': 'Implicit daily rate: [X] EUR/day ([price]/[days])',")
        lines.append("    'margin': 'Safety margin: [X]% included in the price'")
        lines.append("  }")
        lines.append("- conclusion: 'This project is [status] with an implicit daily rate of [X] EUR/day [explanation]'")
        lines.append("- status: 'profitable|risky|unprofitable'")

    return "\n".join(lines) + "\n"


def build_enterprise_prompt(data: Dict[str, Any]) -> str:
    """Compact prompt for a company sizing a project for its product team."""
    basics = _section(data, "basics")
    functionalities = _section(data, "functionalities")
    objectives = _section(data, "objectives")

    lines: List[str] = [
        "You are an expert consultant in estimating web projects for companies.",
        "Your goal is to provide a structured, reliable estimate usable by a product team or a technical decision maker.",
        "",
        "You must answer **only in JSON**, with no comment outside the format.",
        "",
        "### Project context:",
        f"- Type: {_as_text(basics.get('projectType'), 'Not specified')}",
    ]
    features = selected_features(data, ENTREPRISE)
    if features:
        lines.append(f"- Main features: {', '.join(map(str, features))}")
    if functionalities.get("functionalComplexity") is not None:
        lines.append(f"- Functional complexity: {functionalities['functionalComplexity']}")
    if functionalities.get("scalability") is not None:
        lines.append(f"- Scalability required: {functionalities['scalability']}")
    if objectives.get("budgetAmount") is not None:
        lines.append(f"- Known budget: {objectives['budgetAmount']} EUR")
    if objectives.get("projectObjective") is not None:
        lines.append(f"- Strategic objective: {objectives['projectObjective']}")

    lines.extend(
        [
            "",
            "### Constraints:",
            "- The estimate must cover the key phases: design, development, QA, management",
            '- Give an estimate with a confidence level ("high", "medium", "low")',
            "- Include the likely risks (technical, human, schedule)",
            '- If the budget is low compared to the workload, say so in "recommendations"',
            "",
            "### Expected format:",
            "```json",
            json.dumps(_ENTERPRISE_STRUCTURE, indent=4, ensure_ascii=False),
            "```",
            "",
            "Make sure the sum of the days of every phase equals totalDays.",
            "The JSON must be strictly valid, without comments, and directly parsable.",
        ]
    )
    return "\n".join(lines) + "\n"
