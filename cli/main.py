#!/usr/bin/env python3
"""
Research Analysis CLI - Main Entry Point

Usage:
    research register --email you@kampus.ac.id --name "Nama Lengkap"
    research login --email you@kampus.ac.id
    research projects                      # List your projects
    research use <project-id>              # Make a project current
    research upload data.csv               # Upload data for the current project
    research recommend                     # Method recommendations
    research select descriptive correlation
    research process                       # Run every selected method
    research results                       # Show analyses of the current project
    research export --format pdf
    research logout
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console
from rich.prompt import Prompt

from cli.api_client import APIError, ResearchAPIClient
from cli.config import CLIConfig
from cli.renderer import Renderer
from cli.session import SessionContext, SessionStore


ClientFactory = Callable[[CLIConfig, Optional[str]], ResearchAPIClient]


def default_client_factory(config: CLIConfig, token: Optional[str]) -> ResearchAPIClient:
    return ResearchAPIClient(config.api_base_url, token=token, timeout=config.timeout)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="research",
        description="Research Analysis Platform - command line client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--server-url", help="API base URL (default: $RESEARCH_API_URL)")
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command")

    register_parser = subparsers.add_parser("register", help="Create an account")
    register_parser.add_argument("--email", required=True)
    register_parser.add_argument("--name", required=True, help="Full name")
    register_parser.add_argument("--password")
    register_parser.add_argument("--institution")
    register_parser.add_argument("--field", help="Research field")

    login_parser = subparsers.add_parser("login", help="Login")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password")

    subparsers.add_parser("logout", help="Logout and clear the session")
    subparsers.add_parser("status", help="Show the current session")
    subparsers.add_parser("projects", help="List your projects")

    create_parser_ = subparsers.add_parser("project-create", help="Create a project")
    create_parser_.add_argument("--title", required=True)
    create_parser_.add_argument("--type", required=True, choices=["quantitative", "qualitative", "mixed"])
    create_parser_.add_argument("--description")
    create_parser_.add_argument("--hypothesis")
    create_parser_.add_argument("--independent", help="Independent variables, comma-separated")
    create_parser_.add_argument("--dependent", help="Dependent variables, comma-separated")

    use_parser = subparsers.add_parser("use", help="Select the current project")
    use_parser.add_argument("project_id")

    upload_parser = subparsers.add_parser("upload", help="Upload a CSV file to the current project")
    upload_parser.add_argument("file", type=Path)

    subparsers.add_parser("recommend", help="Recommend analysis methods for the current project")

    select_parser = subparsers.add_parser("select", help="Select methods to run")
    select_parser.add_argument("methods", nargs="+")

    process_parser = subparsers.add_parser("process", help="Run the selected methods")
    process_parser.add_argument("--method", action="append", help="Run this method instead of the selection")

    subparsers.add_parser("results", help="Show analyses of the current project")

    export_parser = subparsers.add_parser("export", help="Export the current analysis")
    export_parser.add_argument("--format", default="json", choices=["pdf", "json", "csv"])
    export_parser.add_argument("--output", type=Path, help="Output file (default: analysis_<id>.<format>)")

    return parser


class ResearchCLI:
    """Runs one command against the API, reading and updating the session"""

    def __init__(
        self,
        config: CLIConfig,
        session_store: SessionStore,
        renderer: Renderer,
        client_factory: ClientFactory = default_client_factory,
    ):
        self.config = config
        self.session_store = session_store
        self.session = session_store.load()
        self.renderer = renderer
        self.client_factory = client_factory

    def _client(self) -> ResearchAPIClient:
        return self.client_factory(self.config, self.session.token)

    def _require_login(self) -> bool:
        if not self.session.is_authenticated:
            self.renderer.error("Silakan login terlebih dahulu: research login --email ...")
            return False
        return True

    def _require_project(self) -> bool:
        if not self._require_login():
            return False
        if not self.session.current_project:
            self.renderer.error("Pilih proyek terlebih dahulu: research use <project-id>")
            return False
        return True

    async def run(self, args: argparse.Namespace) -> int:
        handler = getattr(self, f"cmd_{args.command.replace('-', '_')}")
        try:
            return await handler(args)
        except APIError as e:
            if e.code in ("TOKEN_EXPIRED", "INVALID_TOKEN"):
                self.session_store.clear(self.session)
            self.renderer.error(f"{e.message} ({e.code})")
            return 1

    async def _authenticate(self, result: dict) -> int:
        self.session.login(result["user"], result["token"])
        self.session_store.save(self.session)
        self.renderer.success(f"Selamat datang, {result['user'].get('full_name') or result['user']['email']}")
        return 0

    async def cmd_register(self, args) -> int:
        password = args.password or Prompt.ask("Password", password=True)
        async with self._client() as client:
            result = await client.register(
                args.email, password, args.name,
                institution=args.institution, research_field=args.field,
            )
        return await self._authenticate(result)

    async def cmd_login(self, args) -> int:
        password = args.password or Prompt.ask("Password", password=True)
        async with self._client() as client:
            result = await client.login(args.email, password)
        return await self._authenticate(result)

    async def cmd_logout(self, args) -> int:
        self.session_store.clear(self.session)
        self.renderer.success("Logout berhasil")
        return 0

    async def cmd_status(self, args) -> int:
        self.renderer.status(self.session)
        return 0

    async def cmd_projects(self, args) -> int:
        if not self._require_login():
            return 1
        async with self._client() as client:
            projects = await client.list_projects()
        current = self.session.current_project
        self.renderer.projects(projects, current_id=current.get("id") if current else None)
        return 0

    async def cmd_project_create(self, args) -> int:
        if not self._require_login():
            return 1
        async with self._client() as client:
            project = await client.create_project(
                title=args.title,
                research_type=args.type,
                description=args.description,
                hypothesis=args.hypothesis,
                var_independent=args.independent,
                var_dependent=args.dependent,
            )
        self.session.select_project(project)
        self.session_store.save(self.session)
        self.renderer.success(f"Proyek dibuat: {project['title']} ({project['id']})")
        return 0

    async def cmd_use(self, args) -> int:
        if not self._require_login():
            return 1
        async with self._client() as client:
            project = await client.get_project(args.project_id)
        self.session.select_project(project)
        self.session_store.save(self.session)
        self.renderer.success(f"Proyek aktif: {project['title']}")
        return 0

    async def cmd_upload(self, args) -> int:
        if not self._require_project():
            return 1
        if not args.file.exists():
            self.renderer.error(f"File tidak ditemukan: {args.file}")
            return 1
        async with self._client() as client:
            upload = await client.upload_csv(self.session.current_project["id"], args.file)
            project = await client.get_project(self.session.current_project["id"])
        self.session.select_project(project)
        self.session_store.save(self.session)
        self.renderer.upload(upload)
        return 0

    async def cmd_recommend(self, args) -> int:
        if not self._require_project():
            return 1
        project = self.session.current_project
        async with self._client() as client:
            uploads = await client.list_uploads(project["id"])
            data_summary = uploads[0].get("data_summary") if uploads else None
            recommendations = await client.recommend(
                project.get("research_type"),
                hypothesis=project.get("hypothesis"),
                var_independent=project.get("var_independent"),
                var_dependent=project.get("var_dependent"),
                data_summary=data_summary,
            )
        self.renderer.recommendations(recommendations)
        return 0

    async def cmd_select(self, args) -> int:
        if not self._require_project():
            return 1
        self.session.select_methods(args.methods)
        self.session_store.save(self.session)
        self.renderer.success(f"Metode terpilih: {', '.join(self.session.selected_methods)}")
        return 0

    async def cmd_process(self, args) -> int:
        if not self._require_project():
            return 1
        methods: List[str] = args.method or self.session.selected_methods
        if not methods:
            self.renderer.error("Belum ada metode terpilih: research select <method>...")
            return 1

        project_id = self.session.current_project["id"]
        async with self._client() as client:
            uploads = await client.list_uploads(project_id)
            upload_id = uploads[0]["id"] if uploads else None
            for method in methods:
                analysis = await client.process(project_id, method, upload_id=upload_id)
                self.session.set_analysis(analysis)
                self.renderer.analysis(analysis)
            project = await client.get_project(project_id)

        self.session.select_project(project)
        self.session_store.save(self.session)
        return 0

    async def cmd_results(self, args) -> int:
        if not self._require_project():
            return 1
        async with self._client() as client:
            analyses = await client.list_analyses(self.session.current_project["id"])
        if not analyses:
            self.renderer.console.print("[dim]Belum ada hasil analisis.[/dim]")
            return 0
        for analysis in analyses:
            self.renderer.analysis(analysis)
        self.session.set_analysis(analyses[0])
        self.session_store.save(self.session)
        return 0

    async def cmd_export(self, args) -> int:
        if not self._require_login():
            return 1
        analysis = self.session.current_analysis
        if not analysis:
            self.renderer.error("Belum ada analisis aktif: jalankan research process atau research results")
            return 1
        async with self._client() as client:
            content = await client.export_analysis(analysis["id"], args.format)
        output = args.output or Path(f"analysis_{analysis['id']}.{args.format}")
        output.write_bytes(content)
        self.renderer.success(f"Diekspor ke {output}")
        return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    config = CLIConfig(verbose=args.verbose)
    if args.config:
        config.load_from_file(args.config)
    if args.server_url:
        config.api_base_url = args.server_url

    cli = ResearchCLI(config, SessionStore(config.session_file), Renderer(Console()))
    sys.exit(asyncio.run(cli.run(args)))


if __name__ == "__main__":
    main()
