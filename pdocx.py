#!/usr/bin/env python3
"""
pdocx: Convert PDF text into an editable Word document.

This script extracts the positioned text of every PDF page, reconstructs it
into styled paragraphs (alignment, bold/italic runs, bullets, underlined
headings) and writes the result to a .docx file. Page boundaries become hard
page breaks.
"""

import argparse
import logging
import os
import sys
import time
from collections import Counter

# --- Dependency Imports ---
try:
    from rich.console import Console
    from rich.table import Table
    from rich.theme import Theme
except ImportError as e:
    print(f"Error: Missing required library. -> {e}")
    print("Please install all core dependencies with:")
    print("pip install pdfminer.six python-docx rich")
    sys.exit(1)

# --- Local Application Imports ---
from core.log_utils import ContextFilter, setup_logging
from pdocx_lib.api import default_output_path, process_pdf, render_plain_text
from pdocx_lib.config import ConfigService
from pdocx_lib.errors import ReconstructionError
from pdocx_lib.models import Alignment
from pdocx_lib.writer import DocxWriter

log = logging.getLogger("pdocx")


# --- CUSTOM ARGPARSE FORMATTER ---
class CustomHelpFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter
):
    """
    A custom argparse formatter that combines showing default values with
    preserving newline formatting in help text.
    """

    pass


class Application:
    """Orchestrates the PDF to DOCX workflow based on command-line arguments."""

    DEFAULT_FILENAME_SENTINEL = "__DEFAULT_FILENAME__"

    def __init__(self, args):
        self.args = args
        self.stats = {}

    def run(self):
        """Main entry point for the application logic. Returns an exit code."""
        self.stats["start_time"] = time.monotonic()
        setup_logging(
            project_name="pdocx",
            level=logging.INFO if self.args.verbose else logging.WARNING,
            color_logs=self.args.color_logs,
            debug_topics=self.args.debug_topics,
            log_file=self.args.log_file,
        )
        log_filter = ContextFilter(os.path.basename(self.args.pdf_file))
        for handler in logging.getLogger().handlers:
            handler.addFilter(log_filter)

        try:
            config = ConfigService(self.args.config).get_config()
            self._resolve_output_filenames()

            pdf_start = time.monotonic()
            document = process_pdf(
                self.args.pdf_file,
                config,
                pages_str=self.args.pages,
                workers=self.args.jobs,
            )
            self.stats["pdf_analysis_duration"] = time.monotonic() - pdf_start
            self.stats["pages_processed"] = document.page_count
            self.stats["paragraphs"] = len(document.paragraphs) - document.spacer_count

            if not document.paragraphs:
                log.warning("No text could be extracted from '%s'.", self.args.pdf_file)

            if self.args.dry_run:
                self._display_dry_run_summary(document)
            else:
                DocxWriter(config.writer).write(document, self.args.output_file)
            self._save_extracted_text(document)
        except ReconstructionError as e:
            log.critical("Conversion failed. %s", e)
            return 1
        except ValueError as e:
            log.critical("Invalid option or setting: %s", e)
            return 1

        self._display_performance_epilogue()
        return 0

    def _resolve_output_filenames(self):
        """Sets default output filenames based on the input PDF name."""
        S = self.DEFAULT_FILENAME_SENTINEL
        if self.args.output_file == S:
            self.args.output_file = default_output_path(self.args.pdf_file, ".docx")
        if self.args.extracted_file == S:
            self.args.extracted_file = default_output_path(self.args.pdf_file, ".extracted")

    def _save_extracted_text(self, document):
        """Saves the reconstructed plain text to a file if requested."""
        if not self.args.extracted_file:
            return
        try:
            with open(self.args.extracted_file, "w", encoding="utf-8") as f:
                f.write(render_plain_text(document))
            log.info("Reconstructed text saved to: '%s'", self.args.extracted_file)
        except IOError as e:
            log.error("Error saving reconstructed text: %s", e)

    def _display_dry_run_summary(self, document):
        """Prints a per-page summary of the reconstructed document."""
        console = Console(theme=Theme({"title": "bold cyan", "dim": "grey50"}))
        per_page = Counter()
        bullets, underlines, aligned = Counter(), Counter(), Counter()
        chars = Counter()
        for p in document.paragraphs:
            if p.page_break:
                continue
            per_page[p.page_num] += 1
            bullets[p.page_num] += p.bullet
            underlines[p.page_num] += p.underline
            aligned[p.page_num] += p.alignment is not Alignment.LEFT
            chars[p.page_num] += len(p.text)

        table = Table(title=f"Dry Run: {os.path.basename(self.args.pdf_file)}")
        for column in ("Page", "Paragraphs", "Bullets", "Underlined", "Centered/Right", "Chars"):
            table.add_column(column, justify="right")
        for page_num in sorted(per_page):
            table.add_row(
                str(page_num),
                str(per_page[page_num]),
                str(bullets[page_num]),
                str(underlines[page_num]),
                str(aligned[page_num]),
                f"{chars[page_num]:,}",
            )
        console.print(table)
        console.print(
            f"[dim]{document.page_count} page(s), "
            f"{document.spacer_count} page break(s). No DOCX written.[/dim]"
        )

    def _display_performance_epilogue(self):
        """Logs a summary of performance statistics."""
        total_dur = time.monotonic() - self.stats.get("start_time", time.monotonic())
        report = [
            "\n--- Performance Epilogue ---",
            f"Total Execution Time: {total_dur:.1f} seconds",
            f"PDF Analysis: {self.stats.get('pdf_analysis_duration', 0):.1f}s "
            f"({self.stats.get('pages_processed', 0)} pages, "
            f"{self.stats.get('paragraphs', 0)} paragraphs)",
        ]
        if not self.args.dry_run:
            report.append(f"Output: '{self.args.output_file}'")
        log.info("\n".join(report))

    @staticmethod
    def parse_arguments(args=None):
        """Parses command-line arguments."""
        parser = argparse.ArgumentParser(
            description="Convert the text of a PDF into a styled Word document.",
            formatter_class=CustomHelpFormatter,
            add_help=False,
        )
        g_opts = parser.add_argument_group("Main Options")
        g_opts.add_argument("pdf_file", help="Path to the input PDF file.")
        g_opts.add_argument(
            "-h", "--help", action="help", help="Show this help message and exit."
        )

        g_proc = parser.add_argument_group("Processing Control")
        g_proc.add_argument(
            "-p",
            "--pages",
            default="all",
            help="Pages to convert (e.g., '1,3,5-7' or 'all').",
        )
        g_proc.add_argument(
            "-j",
            "--jobs",
            type=int,
            default=1,
            help="Worker threads used to group page fragments into lines.",
        )
        g_proc.add_argument(
            "-c",
            "--config",
            metavar="FILE",
            help="INI file with [Layout] and [Writer] settings.",
        )

        g_out = parser.add_argument_group("Script Output & Actions")
        g_out.add_argument(
            "-o",
            "--output-file",
            default=Application.DEFAULT_FILENAME_SENTINEL,
            help="Output .docx file. Defaults to the PDF name with a .docx extension.",
        )
        g_out.add_argument(
            "-e",
            "--extracted-file",
            nargs="?",
            const=Application.DEFAULT_FILENAME_SENTINEL,
            default=None,
            help="Also save the reconstructed text (default name: <pdf>.extracted).",
        )
        g_out.add_argument(
            "-D",
            "--dry-run",
            action="store_true",
            help="Summarize the reconstruction without writing a DOCX file.",
        )
        g_out.add_argument(
            "--color-logs",
            action="store_true",
            help="Enable colored logging output.",
        )
        g_out.add_argument(
            "--log-file",
            metavar="FILE",
            help="Also write log output to FILE.",
        )
        g_out.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable INFO logging for detailed progress.",
        )
        g_out.add_argument(
            "-d",
            "--debug",
            nargs="?",
            const="all",
            dest="debug_topics",
            metavar="TOPICS",
            help="Enable DEBUG logging (all,extract,group,synth,reconstruct,writer,"
            "api,config).",
        )

        parsed = parser.parse_args(args)
        if parsed.jobs < 1:
            parser.error("--jobs must be at least 1")
        return parsed


def main():
    """Main entry point for the script."""
    # Basic logging config for early errors before full setup
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        args = Application.parse_arguments(sys.argv[1:])
        app = Application(args)
        sys.exit(app.run())
    except OSError as e:
        log.critical(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        log.info("\nProcess interrupted by user. Exiting.")
        sys.exit(130)


if __name__ == "__main__":
    main()
