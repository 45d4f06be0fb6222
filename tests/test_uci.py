import pytest

from weissearch.uci import (
    DEFAULT_DEPTH,
    START_FEN,
    InputCommand,
    classify,
    format_bestmove,
    format_info,
    hash_input,
    mate_score,
    parse_go,
    parse_position,
    parse_setoption,
    set_limit,
    uci_info_lines,
)


@pytest.mark.parametrize("command", list(InputCommand))
def test_command_words_hash_to_their_values(command):
    word = command.name.lower()
    assert hash_input(word) == command.value
    assert classify(word + " extra words") is command


def test_hash_uses_only_first_word():
    assert hash_input("go depth 5") == hash_input("go")


def test_classify_unknown():
    assert classify("xyzzy") is None


def test_set_limit():
    line = "go wtime 1000 btime 2000"
    assert set_limit(line, "btime") == 2000
    assert set_limit(line, "wtime") == 1000
    assert set_limit(line, "movetime") is None


def test_parse_go_picks_side_to_move():
    line = "go wtime 1000 btime 2000 winc 10 binc 20"
    white = parse_go(line, True).limits
    black = parse_go(line, False).limits
    assert (white.time, white.inc) == (1000, 10)
    assert (black.time, black.inc) == (2000, 20)
    assert white.timelimit and black.timelimit


def test_parse_go_defaults():
    limits = parse_go("go", True).limits
    assert limits.depth == DEFAULT_DEPTH
    assert not limits.timelimit
    assert not limits.node_time
    assert not limits.infinite


def test_parse_go_depth_nodes_infinite():
    limits = parse_go("go infinite depth 12 nodes 5000", True).limits
    assert limits.depth == 12
    assert limits.nodes == 5000
    assert limits.node_time
    assert limits.infinite


def test_parse_go_movetime_sets_timelimit():
    limits = parse_go("go movetime 300", False).limits
    assert limits.movetime == 300
    assert limits.timelimit


def test_parse_go_searchmoves():
    command = parse_go("go depth 3 searchmoves e2e4 d2d4", True)
    assert command.searchmoves == ["e2e4", "d2d4"]
    assert command.limits.depth == 3


def test_parse_setoption_int_and_bool():
    assert parse_setoption("setoption name Hash value 64") == ("Hash", 64)
    assert parse_setoption("setoption name Minimal value true") == ("Minimal", True)
    assert parse_setoption("setoption name UCI_Chess960 value false") == ("UCI_Chess960", False)


def test_parse_setoption_longer_names_first():
    assert parse_setoption("setoption name NoobBookLimit value 7") == ("NoobBookLimit", 7)
    assert parse_setoption("setoption name NoobBookMode value best") == ("NoobBookMode", "best")
    assert parse_setoption("setoption name NoobBook value true") == ("NoobBook", True)


def test_parse_setoption_string():
    assert parse_setoption("setoption name SyzygyPath value /tb/syzygy") == (
        "SyzygyPath", "/tb/syzygy")


def test_parse_setoption_unknown():
    with pytest.raises(ValueError):
        parse_setoption("setoption name Contempt value 10")


def test_parse_position_startpos():
    fen, moves = parse_position("position startpos moves e2e4 e7e5")
    assert fen == START_FEN
    assert moves == ["e2e4", "e7e5"]


def test_parse_position_fen_without_moves():
    fen_in = "8/8/8/8/8/8/8/K6k w - - 0 1"
    assert parse_position(f"position fen {fen_in}") == (fen_in, [])


def test_parse_position_fen_with_moves():
    fen_in = "8/8/8/8/8/8/8/K6k w - - 0 1"
    fen, moves = parse_position(f"position fen {fen_in} moves a1a2")
    assert fen == fen_in
    assert moves == ["a1a2"]


def test_mate_score_is_antisymmetric():
    for score in (31990, 31995, 31999):
        assert mate_score(-score, 32000) == -mate_score(score, 32000)
        assert mate_score(score, 32000) > 0


def test_mate_score_grows_with_distance():
    assert mate_score(31999, 32000) < mate_score(31980, 32000)


def test_format_info_centipawns():
    line = format_info(5, 7, 1, 50, -100, 100, 32000, 31000, 10, 1000, 0, 3,
                       ["e2e4", "e7e5", "g1f3"])
    assert line.startswith("info depth 5 seldepth 7 multipv 1 score cp 50 time 10 nodes 1000")
    assert line.endswith("hashfull 3 pv e2e4 e7e5 g1f3")


def test_format_info_bounds():
    low = format_info(5, 7, 1, 200, -100, 100, 32000, 31000, 0, 0, 0, 0, ["e2e4"])
    high = format_info(5, 7, 1, -200, -100, 100, 32000, 31000, 0, 0, 0, 0, ["e2e4"])
    assert "score cp 200 lowerbound" in low
    assert "score cp -200 upperbound" in high


def test_format_info_small_score_short_pv_shows_zero():
    line = format_info(5, 7, 1, 6, -100, 100, 32000, 31000, 0, 0, 0, 0, ["e2e4"])
    assert "score cp 0 " in line


def test_format_info_mate():
    line = format_info(5, 7, 1, 31999, -100, 32001, 32000, 31000, 0, 0, 0, 0, ["e2e4"])
    assert f"score mate {mate_score(31999, 32000)} " in line


def test_format_bestmove():
    assert format_bestmove("e2e4") == "bestmove e2e4"


def test_uci_info_lines():
    lines = uci_info_lines("Engine", 32, 2, 1024, 64)
    assert lines[0] == "id name Engine"
    assert lines[-1] == "uciok"
    assert "option name Hash type spin default 32 min 2 max 1024" in lines
    assert "option name MultiPV type spin default 1 min 1 max 64" in lines