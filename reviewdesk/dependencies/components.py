from reviewdesk.bootstrap.components import Components


def get_components(env: str = "development") -> Components:
    return Components(env)
