from brisk.prompt import CompletionResult, complete_buffer, words_source


def test_longest_common_prefix():
    source = words_source(["hello", "help", "world"])
    assert complete_buffer("he", source) == CompletionResult("hel", ("hello", "help"))


def test_single_candidate_replaces_buffer():
    source = words_source(["hello", "help", "world"])
    assert complete_buffer("w", source) == CompletionResult("world")


def test_no_candidates_leaves_buffer():
    source = words_source(["hello"])
    assert complete_buffer("x", source) == CompletionResult("x")


def test_ambiguous_candidates_are_offered():
    source = words_source(["help", "hello"])
    result = complete_buffer("hel", source)
    assert result.buffer == "hel"
    assert result.candidates == ("help", "hello")


def test_duplicates_and_non_matching_candidates_are_dropped():
    def source(prefix):
        return ["deploy", "deploy", "status"]

    assert complete_buffer("de", source) == CompletionResult("deploy")


def test_no_source():
    assert complete_buffer("abc", None) == CompletionResult("abc")
