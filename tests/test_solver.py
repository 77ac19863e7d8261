"""
Test suite for heuristics, classifier and solver.

Tests verify:
1. Built-in heuristic scores
2. Classifier weighting and zero-weight handling
3. Backtracking search outcomes and determinism
4. Configuration management and solver factory
5. Config-driven runner
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from andaluz.board import Board
from andaluz.classifier import Classifier
from andaluz.config import Config
from andaluz.errors import ZeroWeightClassifier
from andaluz.heuristics import (
    Heuristic,
    attacksum,
    attacksuminverse,
    bruteforce,
    get_heuristic,
    get_heuristic_names,
    horse,
    prioritizecenter,
)
from andaluz.runner import SolverRunner
from andaluz.solver import Outcome, SolutionNode, Solver, create_solver
from andaluz.utils import count_attacking_pairs


def assert_valid_solution(board: Board):
    assert board.is_solved()
    assert len(board.queens()) == board.cols
    assert count_attacking_pairs(board.queens()) == 0


# =============================================================================
# Heuristic Tests
# =============================================================================

def test_bruteforce_heuristic():
    """Test constant score."""
    board = Board(4)
    h = bruteforce(2.0)
    assert h.label == 'BruteForce'
    assert h.evaluate(board, 1, 1) == 1.0
    assert h.score(board, 1, 1) == 2.0


def test_horse_heuristic():
    """Test knight-adjacency scoring."""
    board = Board(8)
    board.toggle(1, 2)
    h = horse()

    assert h.evaluate(board, 3, 3) == 1.0, "(1,2) is a knight's move from (3,3)"
    assert h.evaluate(board, 5, 5) == 0.0
    assert h.evaluate(board, 8, 8) == 0.0

    # Scoring with the candidate queen already placed, as the solver does
    board.toggle(3, 3)
    assert h.evaluate(board, 3, 3) == 1.0
    board.toggle(3, 3)

    empty = Board(8)
    empty.toggle(4, 4)
    assert h.evaluate(empty, 4, 4) == 0.0, "The candidate's own queen does not count"

    print("Horse heuristic test passed")


def test_attack_sum_heuristics():
    """Test attack sum and its inverse."""
    board = Board(4)
    board.toggle(1, 1)
    # Corner queen on 4x4 attacks 3 + 3 + 3 cells
    assert attacksum().evaluate(board, 1, 1) == pytest.approx(9 / 64)
    assert attacksuminverse().evaluate(board, 1, 1) == pytest.approx(55 / 64)

    empty = Board(4)
    assert attacksum().evaluate(empty, 1, 1) == 0.0
    assert attacksuminverse().evaluate(empty, 1, 1) == 1.0


def test_prioritize_center_heuristic():
    """Test center preference uses integer-truncated center."""
    h = prioritizecenter()
    assert h.evaluate(Board(8), 4, 4) == 1.0
    assert h.evaluate(Board(8), 5, 5) == 0.0
    assert h.evaluate(Board(8), 4, 5) == 0.0
    assert h.evaluate(Board(5), 2, 2) == 1.0
    assert h.evaluate(Board(5), 3, 3) == 0.0


def test_heuristic_registry():
    """Test lookup by name."""
    assert get_heuristic_names() == [
        'bruteforce', 'attacksum', 'attacksuminverse', 'horse', 'prioritizecenter'
    ]
    h = get_heuristic('Horse', 0.5)
    assert h.label == 'Horse'
    assert h.weight == 0.5

    with pytest.raises(ValueError):
        get_heuristic('knight')


# =============================================================================
# Classifier Tests
# =============================================================================

def test_classifier_weighted_average():
    """Test weighted average and description."""
    classifier = Classifier()
    assert classifier.is_empty()

    classifier.push(bruteforce(1.0))
    classifier.push(prioritizecenter(), 3.0)

    assert classifier.total_weight == 4.0
    assert str(classifier) == '[BruteForce(1.0), PrioritizeCenter(3.0)]'

    board = Board(8)
    assert classifier.score(board, 4, 4) == pytest.approx(1.0)
    assert classifier.score(board, 1, 1) == pytest.approx(0.25)

    print("Classifier weighted average test passed")


def test_classifier_score_within_heuristic_range():
    """Test that the score lies between the lowest and highest heuristic output."""
    classifier = Classifier()
    classifier.push(horse(2.0))
    classifier.push(attacksuminverse(1.0))
    classifier.push(prioritizecenter(0.5))

    board = Board(6)
    board.toggle(1, 2)
    for cell in board.available_cells():
        outputs = [h.evaluate(board, cell.x, cell.y) for h in classifier.heuristics]
        score = classifier.score(board, cell.x, cell.y)
        assert min(outputs) - 1e-12 <= score <= max(outputs) + 1e-12


def test_classifier_zero_weight():
    """Test that scoring without positive weight fails explicitly."""
    classifier = Classifier()
    with pytest.raises(ZeroWeightClassifier):
        classifier.score(Board(4), 1, 1)

    classifier.push(horse(0.0))
    assert not classifier.is_empty()
    with pytest.raises(ZeroWeightClassifier):
        classifier.score(Board(4), 1, 1)

    classifier.clear()
    assert classifier.is_empty()
    assert classifier.total_weight == 0.0


# =============================================================================
# Solver Tests
# =============================================================================

def test_solution_node_ordering():
    """Test best-first ordering with row-major tie break."""
    nodes = [
        SolutionNode(2, 1, 0.5),
        SolutionNode(1, 2, 0.9),
        SolutionNode(3, 1, 0.9),
        SolutionNode(1, 1, 0.5),
    ]
    ordered = sorted(nodes, key=SolutionNode.sort_key)
    assert [(n.x, n.y) for n in ordered] == [(3, 1), (1, 2), (1, 1), (2, 1)]


def test_solve_4x4_bruteforce():
    """Test plain backtracking on 4x4."""
    board = Board(4)
    solver = Solver()
    solver.push_heuristic(bruteforce(1.0))
    result = solver.solve(board)

    assert result.solved
    assert result.outcome is Outcome.SOLVED
    assert 0 < result.jumps <= 100
    assert result.solution == board.signature()
    assert result.board == bytes(2)
    assert result.heuristics_description == '[BruteForce(1.0)]'
    assert_valid_solution(board)

    print(f"4x4 solved in {result.jumps} jumps")


def test_solve_without_heuristics_falls_back_to_bruteforce():
    """Test the injected default heuristic."""
    explicit = Solver()
    explicit.push_heuristic(bruteforce(1.0))
    expected = explicit.solve(Board(4))

    solver = Solver()
    result = solver.solve(Board(4))

    assert result.solved
    assert result.heuristics_description == '[BruteForce(1.0)]'
    assert result.jumps == expected.jumps
    assert result.solution == expected.solution


def test_solve_zero_weight_heuristics_falls_back():
    """Test that only zero-weight heuristics still get the fallback."""
    solver = Solver()
    solver.push_heuristic(horse(0.0))
    result = solver.solve(Board(4))

    assert result.solved
    assert result.heuristics_description == '[Horse(0.0), BruteForce(1.0)]'


def test_solve_zero_budget():
    """Test that a zero jump budget stops the search unsolved."""
    board = Board(4)
    solver = Solver(max_jumps=0)
    result = solver.solve(board)

    assert not result.solved
    assert result.outcome is Outcome.BUDGET_EXCEEDED
    assert result.jumps == 1, "One placement is tried before the budget check"
    assert result.solution is None
    assert board.queen_count == 0, "Board must be back in its original state"
    assert board.signature() == bytes(2)


def test_solve_budget_exceeded_restores_board():
    """Test that any interrupted search leaves the starting board untouched."""
    for max_jumps in [1, 2, 3, 5]:
        board = Board(6)
        board.toggle(2, 1)
        before = board.copy()

        solver = Solver(max_jumps=max_jumps)
        solver.push_heuristic(bruteforce())
        result = solver.solve(board)

        if result.solved:
            assert_valid_solution(board)
        else:
            assert result.outcome is Outcome.BUDGET_EXCEEDED
            assert board == before


def test_solve_trivial_and_unsolvable_sizes():
    """Test N=1 (trivial) and N=2, N=3 (no solution)."""
    board = Board(1)
    result = Solver().solve(board)
    assert result.solved
    assert result.jumps == 1
    assert board.queens() == [(1, 1)]

    for cols in [2, 3]:
        board = Board(cols)
        solver = Solver()
        result = solver.solve(board)
        assert not result.solved
        assert result.outcome is Outcome.EXHAUSTED
        assert board.queen_count == 0
        assert len(solver.depleted_signatures) > 0


def test_symmetry_pruning_counts():
    """Test that symmetric twins are pruned instead of explored."""
    solver = Solver()
    result = solver.solve(Board(2))

    # (1,1) dead-ends; its three rotations are never explored
    assert result.jumps == 1
    assert result.pruned == 3
    assert len(solver.depleted_signatures) == 4


def test_solve_with_builtin_heuristics():
    """Test every built-in heuristic set on small boards."""
    heuristic_sets = [
        [bruteforce()],
        [attacksum()],
        [attacksuminverse()],
        [horse()],
        [prioritizecenter(), bruteforce()],
        [horse(1.0), prioritizecenter(1.0)],
        [attacksuminverse(2.0), horse(1.0)],
    ]
    for cols in [4, 5]:
        for heuristics in heuristic_sets:
            board = Board(cols)
            solver = Solver(max_jumps=10000)
            for h in heuristics:
                solver.push_heuristic(h)
            result = solver.solve(board)

            assert result.solved, f"{result.heuristics_description} failed on N={cols}"
            assert_valid_solution(board)

    print("Built-in heuristics test passed")


def test_solve_from_partial_board():
    """Test solving with queens already placed."""
    board = Board(5)
    board.toggle(1, 1)
    start = board.signature()
    solver = Solver()
    result = solver.solve(board)

    assert result.board == start
    assert result.solved
    assert board.get_cell(1, 1).is_queen()
    assert_valid_solution(board)


def test_solve_already_solved_board():
    """Test that a complete board is reported solved without jumps."""
    board = Board(4)
    for x, y in [(2, 1), (4, 2), (1, 3), (3, 4)]:
        board.toggle(x, y)

    result = Solver().solve(board)
    assert result.solved
    assert result.jumps == 0
    assert result.solution == board.signature()


def test_solver_is_deterministic():
    """Test that repeated solves give identical results."""
    results = []
    for _ in range(2):
        solver = Solver()
        solver.push_heuristic(horse())
        solver.push_heuristic(attacksuminverse())
        results.append(solver.solve(Board(6)))

    assert results[0].jumps == results[1].jumps
    assert results[0].solution == results[1].solution
    assert results[0].outcome == results[1].outcome


def test_solver_resets_between_solves():
    """Test that jumps and depleted signatures are per solve call."""
    solver = Solver()
    first = solver.solve(Board(4))
    second = solver.solve(Board(4))

    assert second.jumps == first.jumps
    assert second is not first
    assert solver.jumps == second.jumps


def test_custom_heuristic_injection():
    """Test a caller supplied scoring closure."""
    calls = []

    def prefer_last_column(board, x, y):
        calls.append((x, y))
        return x / board.cols

    solver = Solver()
    solver.push_heuristic(Heuristic('LastColumn', 1.0, prefer_last_column))
    board = Board(5)
    result = solver.solve(board)

    assert calls, "Custom heuristic must be invoked"
    assert result.heuristics_description == '[LastColumn(1.0)]'
    assert result.solved
    assert_valid_solution(board)


def test_failing_heuristic_restores_board():
    """Test that an exception raised while scoring leaves the board untouched."""
    for depth in (1, 2, 3):
        def fail_when_deep(board, x, y, depth=depth):
            if board.queen_count > depth:
                raise RuntimeError("scoring failed")
            return 1.0

        board = Board(6)
        board.toggle(1, 2)
        start = board.signature()

        solver = Solver()
        solver.push_heuristic(Heuristic('Failing', 1.0, fail_when_deep))
        with pytest.raises(RuntimeError):
            solver.solve(board)

        assert board.queen_count == 1, f"Queens left behind at depth {depth}"
        assert board.signature() == start
        assert board == Board.from_signature(start, 6)


def test_solver_interface_accepts_log_interval():
    """Test that the abstract solve signature matches the concrete one."""
    import inspect
    from andaluz.interfaces import SolverInterface

    abstract = inspect.signature(SolverInterface.solve).parameters
    concrete = inspect.signature(Solver.solve).parameters
    assert list(abstract) == list(concrete)
    assert abstract['log_interval'].default == 0


def test_set_max_jumps():
    solver = Solver()
    assert solver.max_jumps == 100000
    solver.set_max_jumps(50)
    assert solver.max_jumps == 50
    with pytest.raises(ValueError):
        solver.set_max_jumps(-1)


def test_verbose_output(capsys):
    """Test progress banners."""
    solver = Solver()
    solver.solve(Board(5), verbose=True, log_interval=1)
    out = capsys.readouterr().out

    assert "Backtracking Solver (N=5)" in out
    assert "Outcome: solved" in out
    assert "Jump       1/100000" in out


# =============================================================================
# Config Tests
# =============================================================================

def test_config_creation():
    """Test default configuration."""
    config = Config()
    assert config.sizes == [8]
    assert config.max_jumps == 100000
    assert config.heuristics == {'horse': 1.0, 'prioritizecenter': 1.0}
    assert config.validate() == []


def test_config_from_dict():
    """Test configuration from dictionary."""
    config = Config.from_dict({
        'size': 6,
        'max_jumps': 500,
        'heuristics': {'Horse': 2, 'AttackSumInverse': 1},
    })
    assert config.sizes == [6]
    assert config.max_jumps == 500
    assert config.heuristics == {'horse': 2.0, 'attacksuminverse': 1.0}
    assert config.validate() == []
    assert Config.from_dict(config.to_dict()) == config


def test_config_from_yaml(tmp_path):
    """Test configuration from YAML file."""
    path = tmp_path / 'config.yaml'
    path.write_text(
        "sizes: [4, 5]\n"
        "max_jumps: 2000\n"
        "heuristics:\n"
        "  bruteforce: 1.0\n"
        "verbose: false\n"
    )
    config = Config.from_yaml(str(path))
    assert config.sizes == [4, 5]
    assert config.max_jumps == 2000
    assert config.heuristics == {'bruteforce': 1.0}


def test_config_validation():
    """Test validation error messages."""
    config = Config(sizes=[0], max_jumps=-1, heuristics={'knight': 1.0, 'horse': -2.0})
    errors = config.validate()
    assert len(errors) == 4
    assert any('Board size' in e for e in errors)
    assert any('max_jumps' in e for e in errors)
    assert any("'knight'" in e for e in errors)
    assert any('non-negative' in e and 'horse' in e for e in errors)

    assert Config(sizes=[]).validate() == ["At least one board size must be specified"]


def test_solver_factory():
    """Test solver creation from configuration."""
    config = Config(max_jumps=1234, heuristics={'horse': 0.0, 'attacksum': 2.0})
    solver = create_solver(config)
    assert solver.max_jumps == 1234
    assert str(solver.classifier) == '[AttackSum(2.0)]'

    with pytest.raises(ValueError):
        create_solver(Config(heuristics={'knight': 1.0}))


def test_runner():
    """Test config-driven execution over several sizes."""
    config = Config(sizes=[1, 4, 5], max_jumps=5000, heuristics={'bruteforce': 1.0})
    results = SolverRunner(config).run()

    assert sorted(results.keys()) == [1, 4, 5]
    for size, entry in results.items():
        assert entry['result'].solved
        assert entry['board'].cols == size
        assert_valid_solution(entry['board'])
        assert entry['files'] == {}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
