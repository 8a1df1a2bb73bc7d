import unittest

from fabricpop.core.models import Platform, ReviewFields
from fabricpop.transform.validators import (
    RequiredFieldsValidator,
    classify_review_url,
    platform_for_host,
)


class TestClassifyReviewUrl(unittest.TestCase):
    def test_youtube(self):
        info = classify_review_url("https://www.youtube.com/watch?v=abc")
        self.assertTrue(info.valid)
        self.assertEqual(info.platform, Platform.YOUTUBE)
        self.assertIsNone(info.error)

    def test_known_platforms(self):
        cases = {
            "https://youtu.be/abc": Platform.YOUTUBE,
            "https://medium.com/@x/review": Platform.MEDIUM,
            "https://critic.substack.com/p/matrix": Platform.SUBSTACK,
            "https://open.spotify.com/episode/1": Platform.PODCAST,
            "https://podcasts.apple.com/us/podcast/x": Platform.PODCAST,
            "https://soundcloud.com/x/ep1": Platform.PODCAST,
            "https://letterboxd.com/x/film/the-matrix/": Platform.LETTERBOXD,
            "https://www.imdb.com/review/rw1/": Platform.IMDB,
            "https://www.rottentomatoes.com/m/the_matrix": Platform.ROTTENTOMATOES,
            "https://example.org/blog/matrix": Platform.OTHER,
        }
        for url, platform in cases.items():
            with self.subTest(url=url):
                self.assertEqual(classify_review_url(url).platform, platform)

    def test_hostname_is_case_insensitive(self):
        self.assertEqual(classify_review_url("https://WWW.YouTube.COM/watch").platform, Platform.YOUTUBE)

    def test_path_does_not_affect_platform(self):
        self.assertEqual(classify_review_url("https://example.com/youtube.com").platform, Platform.OTHER)

    def test_first_marker_wins(self):
        self.assertEqual(platform_for_host("medium.com.imdb.com"), Platform.MEDIUM)

    def test_url_is_trimmed(self):
        info = classify_review_url("  https://medium.com/@x/review  ")
        self.assertEqual(info.url, "https://medium.com/@x/review")

    def test_whitespace_in_path_is_accepted(self):
        info = classify_review_url("https://example.com/my review?q=a b")
        self.assertTrue(info.valid)
        self.assertEqual(info.platform, Platform.OTHER)
        self.assertEqual(info.url, "https://example.com/my review?q=a b")

    def test_whitespace_in_host_is_rejected(self):
        info = classify_review_url("https://exa mple.com/review")
        self.assertFalse(info.valid)
        self.assertEqual(info.error, "Invalid URL format")

    def test_empty_url(self):
        for raw in ("", "   ", None):
            info = classify_review_url(raw)
            self.assertFalse(info.valid)
            self.assertEqual(info.error, "URL is required")

    def test_invalid_url(self):
        for raw in ("not a url", "medium.com/review", "https://", "http://host:notaport/"):
            with self.subTest(raw=raw):
                info = classify_review_url(raw)
                self.assertFalse(info.valid)
                self.assertEqual(info.error, "Invalid URL format")


class TestRequiredFieldsValidator(unittest.TestCase):
    def setUp(self):
        self.validator = RequiredFieldsValidator()

    def test_complete_fields(self):
        fields = ReviewFields(media_id=1, media_title="X", rating_value=0, rating_scale="stars5")
        self.assertTrue(self.validator.validate(fields).ok)

    def test_reports_first_missing_field(self):
        fields = ReviewFields(media_id=1, media_title="  ", rating_value=None, rating_scale="stars5")
        result = self.validator.validate(fields)
        self.assertFalse(result.ok)
        self.assertEqual(result.field, "media_title")
        self.assertIn("Media title", result.reason)


if __name__ == "__main__":
    unittest.main()
