REGISTRY = "docker.io"

IMAGE = "firebirdsql/firebird"

TAG = "latest"

# Port the server listens on inside the container.
FIREBIRD_PORT = 3050
