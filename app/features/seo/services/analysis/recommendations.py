from typing import List

from app.features.seo.schemas.report import AnalysisReport, Recommendation


class RecommendationService:
    # (category, priority, solution) per issue source
    TITLE_RULE = ("Metadata", "High", "Optimize title tag length (30-60 characters) and include primary keyword")
    DESCRIPTION_RULE = (
        "Metadata",
        "High",
        "Optimize meta description length (120-160 characters) and include call-to-action",
    )
    HEADINGS_RULE = ("Content Structure", "Medium", "Implement proper heading hierarchy (H1-H6)")
    IMAGES_RULE = ("Images", "Medium", "Add descriptive alt text and specify image dimensions")
    TECHNICAL_RULE = ("Technical SEO", "High", "Implement proper technical SEO elements")

    MISSING_PENALTY = 5
    MULTIPLE_PENALTY = 3
    DEFAULT_PENALTY = 2

    @staticmethod
    def generate_recommendations(report: AnalysisReport) -> List[Recommendation]:
        """
        One recommendation per issue source that has issues, with that
        source's issues joined into a single string. Priority comes from the
        category, never from the issues themselves.
        """
        sources = [
            (report.metadata.title.issues, RecommendationService.TITLE_RULE),
            (report.metadata.description.issues, RecommendationService.DESCRIPTION_RULE),
            (report.headings.issues, RecommendationService.HEADINGS_RULE),
            (report.images.issues, RecommendationService.IMAGES_RULE),
            (report.technical.issues, RecommendationService.TECHNICAL_RULE),
        ]

        recommendations = []
        for issues, (category, priority, solution) in sources:
            if issues:
                recommendations.append(Recommendation(
                    category=category,
                    priority=priority,
                    issue=", ".join(issues),
                    solution=solution,
                ))
        return recommendations

    @staticmethod
    def issue_penalty(issue: str) -> int:
        # "Missing" is checked before "Multiple"; keep this order so scores stay stable
        if "Missing" in issue:
            return RecommendationService.MISSING_PENALTY
        if "Multiple" in issue:
            return RecommendationService.MULTIPLE_PENALTY
        return RecommendationService.DEFAULT_PENALTY

    @staticmethod
    def calculate_overall_score(report: AnalysisReport) -> int:
        """100 minus a flat penalty per scored issue, clamped to 0-100."""
        issues = [
            *report.metadata.title.issues,
            *report.metadata.description.issues,
            *report.headings.issues,
            *report.images.issues,
            *report.technical.issues,
            *report.accessibility.issues,
        ]

        score = 100 - sum(RecommendationService.issue_penalty(issue) for issue in issues)
        return max(0, min(100, score))
