import json
import unittest

from fabricpop.core.builder import ReviewBuilder, build_review
from fabricpop.transform.views import (
    review_digest,
    to_compact_form,
    to_compact_json,
    to_summary_text,
)

CREATED = "2024-03-05T10:00:00+00:00"


def make_review(**overrides):
    fields = dict(
        media_type="movie",
        media_id=603,
        media_title="The Matrix",
        media_year=1999,
        rating_value=4.5,
        rating_scale="stars5",
        review_url="https://medium.com/@x/review",
        reviewer_name="",
        reviewer_address="0xabc",
        notes="private note",
    )
    fields.update(overrides)
    return build_review(ReviewBuilder(clock=lambda: CREATED), **fields)


class TestCompactForm(unittest.TestCase):
    def test_shape_and_key_order(self):
        compact = to_compact_form(make_review())
        self.assertEqual(list(compact), ["m", "r", "l", "a", "d"])
        self.assertEqual(compact["m"], {"t": "movie", "i": 603, "n": "The Matrix", "y": 1999})
        self.assertEqual(compact["r"], {"n": 0.9, "o": {"value": 4.5, "scale": "stars5"}})
        self.assertEqual(compact["l"], "https://medium.com/@x/review")
        self.assertEqual(compact["a"], "0xabc")
        self.assertEqual(compact["d"], CREATED)

    def test_drops_display_fields(self):
        text = to_compact_json(make_review())
        for dropped in ("private note", "Anonymous", "platform", "percentage"):
            self.assertNotIn(dropped, text)

    def test_compact_json_is_canonical(self):
        expected = (
            '{"m":{"t":"movie","i":603,"n":"The Matrix","y":1999},'
            '"r":{"n":0.9,"o":{"value":4.5,"scale":"stars5"}},'
            '"l":"https://medium.com/@x/review","a":"0xabc",'
            '"d":"2024-03-05T10:00:00+00:00"}'
        )
        self.assertEqual(to_compact_json(make_review()), expected)
        self.assertEqual(json.loads(expected), to_compact_form(make_review()))

    def test_idempotent(self):
        review = make_review()
        self.assertEqual(to_compact_json(review), to_compact_json(review))
        self.assertEqual(review_digest(review), review_digest(review))

    def test_digest_changes_with_content(self):
        self.assertNotEqual(review_digest(make_review()), review_digest(make_review(rating_value=4)))
        self.assertEqual(len(review_digest(make_review())), 64)

    def test_missing_address_and_year(self):
        compact = to_compact_form(make_review(reviewer_address=None, media_year=None))
        self.assertIsNone(compact["a"])
        self.assertIsNone(compact["m"]["y"])


class TestSummaryText(unittest.TestCase):
    def test_golden_summary(self):
        expected = "\n".join(
            [
                'Movie Review: "The Matrix" (1999)',
                "Rating: 4.5/5.0 stars (90%)",
                "Reviewed by: Anonymous",
                "Platform: medium",
                "URL: https://medium.com/@x/review",
                "Created: 3/5/2024",
            ]
        )
        self.assertEqual(to_summary_text(make_review()), expected)

    def test_media_labels_and_missing_year(self):
        show = to_summary_text(make_review(media_type="show", media_year=None))
        self.assertTrue(show.startswith('TV Show Review: "The Matrix" (N/A)'))
        game = to_summary_text(make_review(media_type="game"))
        self.assertTrue(game.startswith("Video Game Review:"))

    def test_deterministic(self):
        review = make_review()
        self.assertEqual(to_summary_text(review), to_summary_text(review))


class TestFullRecord(unittest.TestCase):
    def test_to_dict_is_json_serializable(self):
        record = make_review(media_metadata={"genres": ["sci-fi"]}).to_dict()
        self.assertEqual(record["rating"]["stars5"], "4.5")
        self.assertEqual(record["reviewer"]["name"], "Anonymous")
        self.assertEqual(record["media"]["metadata"], {"genres": ["sci-fi"]})
        self.assertEqual(record["metadata"], {"created": CREATED, "notes": "private note"})
        json.dumps(record)


if __name__ == "__main__":
    unittest.main()
