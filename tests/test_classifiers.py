"""Tests for read-only classification."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rtk_hooks.classifiers import classifier_for, collect_tool_names, discover_classifiers
from rtk_hooks.engine import RewriteEngine


def read_only(command: str) -> bool:
    result = RewriteEngine(binary="rtk").rewrite(command)
    assert result is not None, f"not rewritten: {command}"
    return result.read_only


class TestDiscovery:
    def test_classifiers_sorted_by_priority(self):
        priorities = [c.priority for c in discover_classifiers()]
        assert priorities == sorted(priorities)

    def test_every_tool_has_one_owner(self):
        for tool in collect_tool_names():
            owners = [c for c in discover_classifiers() if c.can_handle(tool)]
            assert len(owners) == 1, tool

    def test_unknown_tool(self):
        assert classifier_for("make") is None

    def test_tool_names_longest_first(self):
        names = collect_tool_names()
        assert names.index("golangci-lint") < names.index("go")


class TestShellSyntax:
    def test_pipe_defers(self):
        assert not read_only("git log | head -5")

    def test_chain_defers(self):
        assert not read_only("ls && rm -rf build")
        assert not read_only("ls; rm file")

    def test_redirect_defers(self):
        assert not read_only("cat a.txt > b.txt")

    def test_substitution_defers(self):
        assert not read_only("cat $(git ls-files)")
        assert not read_only("cat `which python`")

    def test_background_defers(self):
        assert not read_only("grep -r foo . &")

    def test_unbalanced_quotes_defer(self):
        assert not read_only("grep 'unterminated src/")

    def test_version_query_allowed(self):
        assert read_only("cargo --version")
        assert read_only("pytest --version")
        assert read_only("curl -V")

    def test_pnpm_scripts_defer(self):
        assert not read_only("pnpm lint")
        assert not read_only("pnpm test")
        assert read_only("pnpm tsc --noEmit")


class TestFiles:
    def test_always_read_only(self):
        for cmd in ("cat README.md", "grep -rn foo src/", "rg TODO", "ls -la", "diff a b", "tree -L 2"):
            assert read_only(cmd), cmd

    def test_find(self):
        assert read_only("find . -name '*.py'")
        assert not read_only("find . -name '*.pyc' -delete")
        assert not read_only("find . -type f -exec chmod 644 {} +")

    def test_tree_output_file(self):
        assert not read_only("tree -o listing.txt")
        assert not read_only("tree -o/tmp/listing.txt")
        assert not read_only("tree -ao listing.txt")

    def test_rg_preprocessor(self):
        assert not read_only("rg --pre ./decompress.sh foo")


class TestGit:
    def test_inspection(self):
        for cmd in ("git status", "git log --oneline -20", "git diff HEAD~1", "git show abc123", "git blame f.py"):
            assert read_only(cmd), cmd

    def test_global_options_skipped(self):
        assert read_only("git -C /repo status")
        assert read_only("git --no-pager log")
        assert not read_only("git -C /repo commit -m x")

    def test_mutations(self):
        for cmd in ("git commit -m msg", "git push origin main", "git checkout -b x", "git reset --hard", "git add ."):
            assert not read_only(cmd), cmd

    def test_diff_output_file(self):
        assert not read_only("git diff --output=patch.diff")
        assert not read_only("git log --out=patch.diff")

    def test_config_overrides_defer(self):
        assert not read_only("git -c core.fsmonitor='touch /tmp/x' status")
        assert not read_only("git -c diff.external=/tmp/tool diff")
        assert not read_only("git --config-env=core.pager=PAGER log")
        assert not read_only("git --exec-path=/tmp/bin status")

    def test_program_running_options(self):
        assert not read_only("git grep --open-files-in-pager=/tmp/tool foo")
        assert not read_only("git grep -O/tmp/tool foo")
        assert not read_only("git grep -iO/tmp/tool foo")
        assert not read_only("git diff --ext-diff")
        assert read_only("git diff --no-ext-diff")
        assert read_only("git grep -n foo")

    def test_ls_remote_upload_pack(self):
        assert read_only("git ls-remote --heads origin")
        assert not read_only("git ls-remote --upload-pack=/tmp/tool .")
        assert not read_only("git ls-remote -u /tmp/tool .")

    def test_branch(self):
        assert read_only("git branch")
        assert read_only("git branch -a -v")
        assert read_only("git branch --contains abc123")
        assert not read_only("git branch feature")
        assert not read_only("git branch -D old")

    def test_tag(self):
        assert read_only("git tag")
        assert read_only("git tag -l 'v1.*'")
        assert not read_only("git tag v1.0")
        assert not read_only("git tag -d v1.0")

    def test_stash_remote_config_reflog(self):
        assert read_only("git stash list")
        assert not read_only("git stash")
        assert not read_only("git stash pop")
        assert read_only("git remote -v")
        assert not read_only("git remote add origin url")
        assert read_only("git config --get user.name")
        assert not read_only("git config user.name me")
        assert read_only("git reflog")
        assert not read_only("git reflog expire --all")

    def test_bare_git(self):
        assert not read_only("git")


class TestGh:
    def test_list_and_view(self):
        assert read_only("gh pr list")
        assert read_only("gh pr view 123 --comments")
        assert read_only("gh run view 42 --log")
        assert read_only("gh -R owner/repo issue list")

    def test_mutations(self):
        assert not read_only("gh pr create --fill")
        assert not read_only("gh pr merge 12")
        assert not read_only("gh repo clone owner/repo")

    def test_status_search_auth(self):
        assert read_only("gh status")
        assert read_only("gh search prs --author me")
        assert read_only("gh auth status")
        assert not read_only("gh auth login")

    def test_api(self):
        assert read_only("gh api repos/o/r/pulls")
        assert read_only("gh api -X GET repos/o/r")
        assert not read_only("gh api -X POST repos/o/r/issues")
        assert not read_only("gh api repos/o/r/issues -f title=x")
        assert not read_only("gh api --method=DELETE repos/o/r")


class TestContainers:
    def test_docker(self):
        assert read_only("docker ps -a")
        assert read_only("docker logs web --tail 50")
        assert read_only("docker compose ps")
        assert read_only("docker -H tcp://host:2375 images")
        assert not read_only("docker run --rm alpine")
        assert not read_only("docker compose up -d")
        assert not read_only("docker rm web")

    def test_kubectl(self):
        assert read_only("kubectl get pods -A")
        assert read_only("kubectl -n prod describe pod web")
        assert read_only("kubectl config current-context")
        assert read_only("kubectl rollout status deploy/web")
        assert not read_only("kubectl apply -f deploy.yaml")
        assert not read_only("kubectl delete pod web")
        assert not read_only("kubectl config use-context prod")
        assert not read_only("kubectl rollout restart deploy/web")


class TestPackages:
    def test_npm(self):
        assert read_only("npm ls --depth=0")
        assert read_only("npm outdated")
        assert read_only("npm audit")
        assert not read_only("npm audit fix")
        assert not read_only("npm install")
        assert not read_only("npm run build")

    def test_pip(self):
        assert read_only("pip list")
        assert read_only("pip show requests")
        assert read_only("uv pip freeze")
        assert not read_only("pip install requests")
        assert not read_only("uv pip install requests")

    def test_cargo_go_prisma(self):
        assert read_only("cargo tree")
        assert not read_only("cargo build --release")
        assert read_only("go env GOPATH")
        assert not read_only("go env -w GOPROXY=direct")
        assert read_only("go mod graph")
        assert not read_only("go mod tidy")
        assert read_only("go vet ./...")
        assert not read_only("go vet -vettool=/tmp/tool ./...")
        assert not read_only("go vet -vettool /tmp/tool ./...")
        assert not read_only("go list -toolexec /tmp/tool ./...")
        assert not read_only("go list -mod=mod ./...")
        assert read_only("go list -mod=readonly ./...")
        assert read_only("prisma validate")
        assert read_only("prisma migrate status")
        assert not read_only("prisma migrate dev")


class TestLint:
    def test_tsc(self):
        assert read_only("tsc --noEmit")
        assert read_only("npx tsc --noEmit -p tsconfig.json")
        assert not read_only("tsc")

    def test_eslint(self):
        assert read_only("eslint src/")
        assert not read_only("eslint --fix src/")
        assert not read_only("eslint -o report.txt src/")
        assert not read_only("eslint -o/tmp/report.txt src/")
        assert not read_only("eslint --output-file=report.txt src/")

    def test_prettier(self):
        assert read_only("prettier --check .")
        assert not read_only("prettier --write .")
        assert not read_only("prettier src/index.ts")

    def test_ruff(self):
        assert read_only("ruff check .")
        assert read_only("ruff .")
        assert not read_only("ruff check --fix .")
        assert not read_only("ruff check --output-file /tmp/out .")
        assert not read_only("ruff check -o/tmp/out .")
        assert read_only("ruff format --check .")
        assert not read_only("ruff format .")

    def test_golangci_lint(self):
        assert read_only("golangci-lint run")
        assert not read_only("golangci-lint run --fix")


class TestRunnersAndNetwork:
    def test_test_runners_defer(self):
        assert not read_only("pytest -x")
        assert not read_only("python -m pytest tests/")
        assert not read_only("npx vitest run")
        assert not read_only("playwright test")

    def test_curl(self):
        assert read_only("curl -I https://example.com")
        assert not read_only("curl https://example.com")
        assert not read_only("curl -I -o out.txt https://example.com")
        assert read_only("curl -sI https://example.com")
        assert not read_only("curl -I -o/tmp/out https://example.com")
        assert not read_only("curl -sIo /tmp/out https://example.com")
        assert not read_only("curl -I --trace /tmp/out https://example.com")
        assert not read_only("curl -I --trace-ascii=/tmp/out https://example.com")
        assert not read_only("curl -I -K /tmp/curlrc https://example.com")
        assert not read_only("curl -I --stderr /tmp/err https://example.com")

    def test_wget(self):
        assert read_only("wget --spider https://example.com")
        assert not read_only("wget https://example.com/file.tar.gz")
        assert not read_only("wget --spider --post-data=a=1 https://example.com")
        assert not read_only("wget --spider --post-file /tmp/body https://example.com")
        assert not read_only("wget --spider --method=DELETE https://example.com")
        assert not read_only("wget --spider -o /tmp/log https://example.com")
        assert not read_only("wget --spider -qo/tmp/log https://example.com")
