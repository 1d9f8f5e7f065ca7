"""Pytest fixtures for git-worktree-manager tests"""
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_worktree_manager.config import Config
from git_worktree_manager.core.session import WorktreeSession
from git_worktree_manager.models.state import SessionState
from git_worktree_manager.models.worktree import CommitInfo, Worktree
from git_worktree_manager.services.git.operations import WorktreeOperations
from git_worktree_manager.services.git.worktrees import WorktreeService, get_repo_root

NOW = datetime(2024, 6, 1, 12, 0, 0)
REPO_ROOT = "/home/dev/project"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def repo_root(git_repo):
    """Repository root as git reports it (symlinks resolved)."""
    return get_repo_root(git_repo.working_dir)


@pytest.fixture
def git_repo_with_worktree(git_repo, repo_root):
    """Repository with a linked worktree for feature/x holding an extra commit."""
    worktree_path = Path(repo_root) / ".worktrees" / "feature-x"
    git_repo.git.worktree("add", "-b", "feature/x", str(worktree_path))

    wt_repo = git.Repo(worktree_path)
    (worktree_path / "fix.txt").write_text("fixed\n")
    wt_repo.git.add("fix.txt")
    wt_repo.git.commit("-m", "fix bug")
    wt_repo.close()

    yield git_repo, str(worktree_path)


@pytest.fixture
def sample_worktrees():
    """Main worktree plus a dirty feature worktree with a two-hour-old commit."""
    return [
        Worktree(
            path=REPO_ROOT,
            branch="main",
            head="a" * 40,
            is_dirty=False,
            last_commit=CommitInfo(
                hash="aaaaaaa",
                message="Initial commit",
                date=NOW - timedelta(days=3),
                author="Test User",
            ),
            is_current=True,
            is_main=True,
        ),
        Worktree(
            path=f"{REPO_ROOT}/.worktrees/feature-x",
            branch="feature/x",
            head="b" * 40,
            is_dirty=True,
            last_commit=CommitInfo(
                hash="bbbbbbb",
                message="fix bug",
                date=NOW - timedelta(hours=2),
                author="Test User",
            ),
        ),
    ]


@pytest.fixture
def mock_reader(sample_worktrees):
    """Mock worktree reader that returns the sample worktrees."""
    reader = Mock(spec=WorktreeService)
    reader.repo_root = REPO_ROOT
    reader.list_worktrees = Mock(return_value=list(sample_worktrees))
    return reader


@pytest.fixture
def mock_operations():
    """Mock mutation service."""
    operations = Mock(spec=WorktreeOperations)
    operations.repo_root = REPO_ROOT
    return operations


@pytest.fixture
def clock():
    """Controllable clock for status message expiry."""
    current = {"now": NOW}

    def now():
        return current["now"]

    def advance(seconds):
        current["now"] = current["now"] + timedelta(seconds=seconds)

    now.advance = advance
    return now


@pytest.fixture
def session(sample_worktrees, mock_reader, mock_operations, clock):
    """Session over the sample worktrees with mocked git services."""
    state = SessionState(
        repo_root=REPO_ROOT,
        worktrees=list(sample_worktrees),
        filtered=list(sample_worktrees),
        height=24,
    )
    return WorktreeSession(
        state,
        reader=mock_reader,
        operations=mock_operations,
        config=Config(shell="/bin/zsh"),
        cwd=REPO_ROOT,
        clock=clock,
    )

