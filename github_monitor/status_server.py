"""Status server exposing monitor health over HTTP."""
import logging
import threading
from flask import Flask, jsonify

logger = logging.getLogger(__name__)


class StatusServer:
    """Simple Flask-based server reporting the monitor's state."""

    def __init__(self, config, state_manager):
        """Initialize the status server."""
        self.config = config
        self.state_manager = state_manager
        self.app = Flask(__name__)
        self.server_thread = None
        self.running = False

        # Register routes
        self._register_routes()

    def _register_routes(self):
        """Register Flask routes."""

        @self.app.route('/health', methods=['GET'])
        def health_check():
            """Health check endpoint."""
            return jsonify({"status": "ok"}), 200

        @self.app.route('/status', methods=['GET'])
        def status():
            """Current watermark and last cycle outcome."""
            return jsonify(self.state_manager.snapshot()), 200

    def start(self):
        """Start the status server in a separate thread."""
        if self.running:
            logger.warning("Status server is already running")
            return

        def run_server():
            logger.info("Starting status server on %s:%s",
                        self.config.STATUS_HOST, self.config.STATUS_PORT)
            self.app.run(
                host=self.config.STATUS_HOST,
                port=self.config.STATUS_PORT,
                debug=False,
                use_reloader=False,  # Disable reloader to avoid duplicate processes
                threaded=True
            )

        self.server_thread = threading.Thread(target=run_server)
        # Make thread a daemon so it exits when main thread exits
        self.server_thread.daemon = True
        self.server_thread.start()
        self.running = True
        logger.info("Status server thread started")
