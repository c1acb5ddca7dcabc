import pytest

from signal_engine.config import SentimentConfig
from signal_engine.core.sentiment import SentimentScorer, _load_afinn, sentiment_label, tokenize


@pytest.mark.parametrize(
    "score, label",
    [
        (5, "Very Positive"),
        (3, "Very Positive"),
        (2, "Positive"),
        (1, "Positive"),
        (0.01, "Positive"),
        (0, "Neutral"),
        (-0.5, "Negative"),
        (-1, "Negative"),
        (-2, "Very Negative"),
        (-7, "Very Negative"),
    ],
)
def test_label_thresholds(score, label):
    assert sentiment_label(score) == label


def test_label_is_monotonic_in_score():
    order = ["Very Negative", "Negative", "Neutral", "Positive", "Very Positive"]
    ranks = [order.index(sentiment_label(score)) for score in range(-6, 7)]
    assert ranks == sorted(ranks)


@pytest.mark.parametrize("text", ["", None, "   ", "!!! ..."])
def test_empty_text_is_neutral(scorer, text):
    result = scorer.score(text)
    assert result.score == 0
    assert result.comparative == 0.0
    assert result.label == "Neutral"


def test_score_is_sum_and_comparative_is_per_token(scorer):
    result = scorer.score("A great win, but one bad quarter.")
    # great(3) + win(1) + bad(-1) over 7 tokens
    assert result.score == 3
    assert result.tokens == 7
    assert result.comparative == pytest.approx(3 / 7)
    assert result.label == "Very Positive"
    assert result.positive_words == ("great", "win")
    assert result.negative_words == ("bad",)


def test_negator_flips_following_token(scorer):
    result = scorer.score("That was not good")
    assert result.score == -2
    assert result.label == "Very Negative"
    assert result.negative_words == ("good",)


def test_custom_negators():
    scorer = SentimentScorer(SentimentConfig(negators=frozenset({"hardly"})), lexicon={"good": 2})
    assert scorer.score("hardly good").score == -2
    assert scorer.score("not good").score == 2


def test_tokenize_keeps_apostrophes_and_hyphens():
    assert tokenize("He isn't day-to-day (yet)!") == ["he", "isn't", "day-to-day", "yet"]


def test_scoring_is_deterministic(scorer):
    text = "Terrible loss for a good team"
    assert scorer.score(text) == scorer.score(text)


def test_afinn_lexicon_polarity():
    pytest.importorskip("afinn")
    scorer = SentimentScorer()
    assert scorer.score("What a great win").score > 0
    assert scorer.score("A terrible, awful performance").score < 0
    assert scorer.score("not good").score < 0
    assert scorer.score("The team met on Tuesday").label == "Neutral"


def test_tokenize_deletes_punctuation_inside_words():
    assert tokenize("The U.S. crowd, 9/10 loud") == ["the", "us", "crowd", "910", "loud"]


def test_compound_tokens_are_looked_up_whole():
    scorer = SentimentScorer(lexicon={"win": 4, "good": 3})
    assert scorer.score("win-win").score == 0
    assert scorer.score("not-good").score == 0


def test_afinn_compound_tokens_take_no_subword_weight():
    pytest.importorskip("afinn")
    scorer = SentimentScorer()
    assert scorer.score("not-good").score == 0
    assert scorer.score("not-good").positive_words == ()
    assert scorer.score("win-win").score == _load_afinn().get("win-win", 0)
    assert scorer.score("win").score == 4
