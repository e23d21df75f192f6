from app.features.seo.services.analysis.recommendations import RecommendationService
from app.features.seo.services.analysis.seo_analyzer import SEOAnalyzerService
from conftest import build_page


def analyzed(body: str = "", head: str = ""):
    return SEOAnalyzerService.analyze(build_page(head=head, body=body), "https://example.com/")


class TestIssuePenalty:
    def test_missing_costs_five(self):
        assert RecommendationService.issue_penalty("Missing H1 heading") == 5

    def test_multiple_costs_three(self):
        assert RecommendationService.issue_penalty("Multiple H1 headings found") == 3

    def test_anything_else_costs_two(self):
        assert RecommendationService.issue_penalty("Title too short (< 30 characters)") == 2

    def test_missing_wins_over_multiple(self):
        assert RecommendationService.issue_penalty("Multiple values, Missing one") == 5


class TestOverallScore:
    def test_score_never_drops_below_zero(self):
        images = "".join(f'<img src="/{i}.png" alt="x">' for i in range(60))

        report = analyzed(body=images)

        assert report.score == 0

    def test_unscored_sections_do_not_change_score(self):
        # Broken links and thin content are reported but not scored
        with_noise = analyzed(body='<a href="#main">skip</a><a>broken</a><h1>Title</h1>')
        without_noise = analyzed(body='<a href="#main">skip</a><h1>Title</h1>')

        assert with_noise.links.issues
        assert with_noise.score == without_noise.score


class TestRecommendations:
    def test_image_issues_are_joined_into_one_entry(self):
        report = analyzed(body='<img src="a.png"><img src="b.png" alt="b">')

        image_recommendations = [r for r in report.recommendations if r.category == "Images"]

        assert len(image_recommendations) == 1
        assert image_recommendations[0].priority == "Medium"
        assert image_recommendations[0].issue == (
            "Image missing dimensions: a.png, Image missing dimensions: b.png, 1 images missing alt text"
        )
        assert image_recommendations[0].solution == "Add descriptive alt text and specify image dimensions"

    def test_title_and_description_get_separate_metadata_entries(self):
        report = analyzed(head="<title>Short</title>")

        metadata = [r for r in report.recommendations if r.category == "Metadata"]

        assert [r.issue for r in metadata] == ["Title too short (< 30 characters)", "Missing meta description"]
        assert all(r.priority == "High" for r in metadata)

    def test_accessibility_issues_score_but_do_not_recommend(self):
        report = analyzed(body="<h1>Title</h1>")

        assert report.accessibility.issues == ["No skip navigation links found"]
        assert "Accessibility" not in {r.category for r in report.recommendations}
