# HTTP layer - Flask blueprints and route modules
