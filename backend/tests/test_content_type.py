import pytest

from signal_engine.config import LONG_FORM_CHANNEL_IDS, PodcastConfig
from signal_engine.core.content_type import ContentTypeClassifier
from signal_engine.errors import IncompleteMetadataError
from signal_engine.models import RawMediaItem


@pytest.fixture
def classifier():
    return ContentTypeClassifier()


def _item(title="", description="", channel_id="UC_unknown", duration=600):
    return RawMediaItem(
        video_id="vid123",
        title=title,
        description=description,
        channel_id=channel_id,
        duration_seconds=duration,
    )


def test_long_episode_with_interview_title(classifier):
    result = classifier.classify(_item("Full Episode: Guest Interview", duration=2400))
    assert result.score == 5
    assert result.is_podcast is True
    assert result.signals == ("duration", "title")


def test_known_channel_and_duration(classifier):
    result = classifier.classify(_item("Monday recap", channel_id=LONG_FORM_CHANNEL_IDS[1], duration=3600))
    # 3 + 3 - 2 (recap)
    assert result.score == 4
    assert result.is_podcast is True


def test_long_clip_compilation_is_suppressed(classifier):
    result = classifier.classify(_item("Top 10 plays of the season", duration=1900))
    assert result.score == 1
    assert result.is_podcast is False


def test_short_podcast_clip_needs_more_support(classifier):
    result = classifier.classify(_item("Podcast clip: the trade debate", duration=300))
    assert result.score == 0
    assert result.is_podcast is False


def test_description_adds_one(classifier):
    result = classifier.classify(
        _item("Episode 112 breakdown", description="Listen to the full episode on any podcast app", duration=900)
    )
    assert result.score == 3
    assert "description" in result.signals
    assert result.is_podcast is False


@pytest.mark.parametrize(
    "title",
    [
        "Ep. 45 - Draft talk",
        "Episode #3: Camp notes",
        "The Mahomes Show #212",
        "Full Show: Monday Night",
        "Roundtable discussion on the playoffs",
        "Sitting down with Travis Kelce",
    ],
)
def test_long_form_title_patterns(classifier, title):
    assert "title" in classifier.classify(_item(title)).signals


@pytest.mark.parametrize(
    "title",
    [
        "Game Highlights",
        "Best plays of week 9",
        "Best Moments from camp",
        "10 minutes of Patrick Mahomes",
        "Postgame recap",
        "Viral clip",
    ],
)
def test_short_form_title_patterns(classifier, title):
    assert "short_form" in classifier.classify(_item(title)).signals


def test_lowercase_with_phrase_is_not_a_guest(classifier):
    assert "title" not in classifier.classify(_item("playing with fire")).signals


def test_duration_boundary(classifier):
    assert "duration" in classifier.classify(_item(duration=1800)).signals
    assert "duration" not in classifier.classify(_item(duration=1799)).signals


def test_unknown_duration_is_rejected(classifier):
    stub = RawMediaItem(video_id="abc", title="Podcast episode 1", channel_id=LONG_FORM_CHANNEL_IDS[0])
    with pytest.raises(IncompleteMetadataError) as exc_info:
        classifier.classify(stub)
    assert exc_info.value.video_id == "abc"


def test_zero_duration_is_a_known_value(classifier):
    result = classifier.classify(_item("Live stream", duration=0))
    assert result.score == 0


def test_classification_is_pure(classifier):
    item = _item("Full Show with Guests", description="podcast", duration=4000)
    assert classifier.classify(item) == classifier.classify(item)


def test_threshold_is_configurable():
    classifier = ContentTypeClassifier(PodcastConfig(threshold=6))
    result = classifier.classify(_item("Full Episode: Guest Interview", duration=2400))
    assert result.score == 5
    assert result.is_podcast is False
