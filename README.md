# weissearch

Building blocks for the search side of a UCI chess engine, using only
the standard library.

## Modules

- `weissearch.transposition`: a bucketed transposition table
  (`TranspositionTable`, `TTEntry`, `Bound`). Each bucket holds two
  entries. Entries age by search generation and replacement prefers
  depth. `hash_full` estimates the load in permille from the first 1000
  buckets. The module also has the mate-distance helpers `score_to_tt`
  and `score_from_tt`, and `tt_score_is_more_informative`. The table has
  a size of 0 until `resize()` applies the requested size, which is
  32 MB by default or whatever `request_size` set. Until then `probe`
  raises `RuntimeError`. `store` raises `ValueError` for an invalid
  bound or for a score that does not fit in 16 bits.
- `weissearch.history`: history heuristics. It has the bounded gravity
  update `history_bonus`, the depth-based `bonus` and `malus`,
  `correction_bonus` for correcting the static evaluation, key indexing
  with `pawn_structure_index` and `correction_index`, and
  `combine_correction`, the weighted mix of correction entries. A sparse
  `HistoryTable` has `get`, `update` and `clear`.
- `weissearch.timeman`: `SearchLimits` holds the constraints of a `go`
  command. `init_time_management` sets the optimal and maximum time for
  a move. `out_of_time` returns whether a running search must stop,
  together with the updated pruning flag. `now_ms` and `time_since` read
  a monotonic clock in milliseconds.
- `weissearch.threads`: root move bookkeeping with `RootMove`,
  `sort_root_moves` (a stable, descending, in-place sort from a given
  index) and `select_root_moves`. `total_nodes` and `total_tb_hits` sum
  over any objects with `nodes` and `tbhits`. `Signal` is a flag that
  threads can wait on (`set`, `clear`, `is_set`, `wait`, `wake`).
- `weissearch.uci`: UCI text protocol helpers.
  - `hash_input`, `classify` and `InputCommand` recognise commands.
  - `set_limit` and `parse_go` read `go` lines into a `GoCommand`, which
    holds `SearchLimits` and the searchmoves as strings.
  - `parse_setoption` returns the option name and a typed value. It
    raises `ValueError` for an unknown option.
  - `parse_position` splits a `position` line into a FEN and its moves.
  - `mate_score`, `format_info`, `format_bestmove` and `uci_info_lines`
    produce output lines.
- `weissearch.tuner`: gradient-descent tuning of linear evaluation
  terms.
  - `TunerEntry` holds one training position as sparse coefficients.
  - Evaluation and error: `linear_evaluation`, `sigmoid`,
    `static_evaluation_errors`, `tuned_evaluation_errors`,
    `compute_gradient` and `compute_optimal_k`.
  - `AdamOptimizer` holds the parameters and the Adam state, with a
    stepped learning rate.
  - `parse_result` reads the `[1.0]`, `[0.5]` or `[0.0]` marker from a
    dataset line. `sparse_coefficients` builds the `(index, coefficient)`
    pairs.
  - `format_score_pair` and `format_array` print tuned terms as constant
    declarations.

## Examples

History updates:

```python
from weissearch.history import bonus, malus, history_bonus

bonus(4)   # 762
malus(4)   # -834

entry = history_bonus(0, bonus(4), 5280)
```

Recognising UCI commands:

```python
from weissearch.uci import InputCommand, classify, hash_input

hash_input("go depth 10")          # 11, only the first word counts
classify("isready") is InputCommand.ISREADY   # True
classify("hello")                  # None
```

Time management:

```python
from weissearch.uci import parse_go
from weissearch.timeman import init_time_management

go = parse_go("go wtime 60000 btime 60000 winc 1000 binc 1000", white_to_move=True)
init_time_management(go.limits)
go.limits.optimal_usage, go.limits.max_usage
```

Transposition table:

```python
from weissearch.transposition import Bound, TranspositionTable

tt = TranspositionTable(requested_mb=2)
tt.resize()
entry, hit = tt.probe(0x1234_5678_9ABC_DEF0)   # hit is False
tt.store(entry, 0x1234_5678_9ABC_DEF0, move=0, score=25, eval=20, depth=5,
         bound=Bound.EXACT)
```

The transposition table stores scores near mate relative to the current
node and restores them relative to the root. So
`score_from_tt(score_to_tt(s, ply, w), ply, w)` gives back `s`.

## What the package does not do

There is no board representation, move generation, static evaluation or
alpha-beta search loop here, so the package does not play chess by
itself. There is no command-line program and no UCI input loop. The
`uci` module parses and formats lines, and the caller reads standard
input and acts on the results. Moves are plain integers or strings
chosen by the caller. The tuner works on `TunerEntry` objects that the
caller builds. It does not read datasets from disk and does not trace an
evaluation function.