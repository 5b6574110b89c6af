from transcriptpro import CaptionEntry
from transcriptpro.captions.sentences import PunctuationSentenceProcessor, merge_into_sentences


def test_merge_on_sentence_punctuation():
    captions = [
        CaptionEntry(0.0, 1.5, "so today we"),
        CaptionEntry(1.5, 3.0, "talk about verbs."),
        CaptionEntry(3.0, 4.0, "Ready?"),
        CaptionEntry(4.5, 6.0, "let's go"),
    ]
    assert merge_into_sentences(captions) == [
        CaptionEntry(0.0, 3.0, "so today we talk about verbs."),
        CaptionEntry(3.0, 4.0, "Ready?"),
        CaptionEntry(4.5, 6.0, "let's go"),
    ]


def test_merge_splits_long_runs_without_punctuation():
    captions = [CaptionEntry(i * 4.0, (i + 1) * 4.0, f"part {i}") for i in range(5)]
    sentences = merge_into_sentences(captions, max_duration=10.0)
    assert [s.text for s in sentences] == ["part 0 part 1", "part 2 part 3", "part 4"]
    assert all(s.duration <= 10.0 for s in sentences)


def test_merge_empty():
    assert merge_into_sentences([]) == []


def test_processor_uses_configured_duration():
    captions = [CaptionEntry(0.0, 6.0, "one"), CaptionEntry(6.0, 12.0, "two")]
    assert len(PunctuationSentenceProcessor(max_duration=8.0).process(captions)) == 2
    assert len(PunctuationSentenceProcessor().process(captions)) == 1
