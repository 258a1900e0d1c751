import argparse
import sys
from typing import List, Optional
from moodtrace.config.settings import ConfigManager, AppConfig
from moodtrace.utils.logging import StructuredLogger
from moodtrace.data.processor import SampleLoader
from moodtrace.data.schemas import JournalPrompt
from moodtrace.engine.session import MoodSession


class MoodTraceApp:
    def __init__(self, config_path: Optional[str] = None):
        self.config_manager = ConfigManager()
        self.config: Optional[AppConfig] = None
        self.logger: Optional[StructuredLogger] = None
        self.config_path = config_path

    def initialize(self) -> None:
        try:
            self.config = self.config_manager.load(self.config_path)
            self.logger = StructuredLogger(
                "moodtrace.main",
                level=self.config.logging.level,
                format=self.config.logging.format
            )
            self.logger.log_config(self.config.to_dict())
        except Exception as e:
            print(f"Failed to initialize MoodTrace: {e}")
            sys.exit(1)

    def replay(self, input_path: str, export_path: Optional[str] = None) -> MoodSession:
        with self.logger.operation_context("MoodTraceApp", "replay", input=input_path) as log:
            samples = SampleLoader().load_csv(input_path)
            log.info("Loaded sample log", samples=len(samples))
            session = MoodSession(self.config, logger=self.logger)
            prompts = []
            session.add_listener(prompts.append)
            print(f"\n{'#':>3}  {'track':<28} {'V':>5} {'E':>5}  {'emotion':<16} {'dist':>6}  state")
            print("-" * 78)
            for i, (sample, label) in enumerate(samples, 1):
                session.submit_sample(sample, label)
                emotion = session.latest_emotion_state()
                print(
                    f"{i:>3}  {label[:28]:<28} {sample.valence:>5.2f} {sample.energy:>5.2f}  "
                    f"{emotion.label.value:<16} {session.last_distance():>6.3f}  "
                    f"{session.anomaly_state().value.upper()}"
                )
            self._display_summary(session, prompts)
            if export_path:
                session.history.to_frame().to_csv(export_path, index=False)
                log.info("Exported history", path=export_path, entries=len(session.history))
            return session

    def serve(self, host: str, port: int) -> None:
        import uvicorn
        from moodtrace.api import AppState, create_app
        app = create_app(AppState(config=self.config))
        uvicorn.run(app, host=host, port=port, log_level=self.config.logging.level.lower())

    def _display_summary(self, session: MoodSession, prompts: List[JournalPrompt]) -> None:
        baseline = session.baseline_snapshot()
        print("-" * 78)
        print(f"Baseline: valence={baseline['valence']:.3f} energy={baseline['energy']:.3f}")
        print(f"Calibration: {session.calibration_progress() * 100:.0f}%")
        print(f"Journal prompts raised: {len(prompts)}")
        for prompt in prompts:
            print(f"  - {prompt.track_label}: {prompt.emotion.label.value} (distance {prompt.distance:.3f})")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MoodTrace - listening-mood baseline tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (packaged default when omitted)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    replay_parser = subparsers.add_parser("replay", help="Replay a recorded sample log")
    replay_parser.add_argument(
        "--input",
        required=True,
        help="CSV file with label, valence, energy and optional tempo columns"
    )
    replay_parser.add_argument(
        "--export",
        help="Write the final session history to this CSV file"
    )
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: Optional[list] = None):
    parser = create_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)
    app = MoodTraceApp(args.config)
    app.initialize()
    try:
        if args.command == "replay":
            app.replay(args.input, args.export)
        elif args.command == "serve":
            app.serve(args.host, args.port)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
