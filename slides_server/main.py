from slides_server.core.registrar import register_app

app = register_app()
