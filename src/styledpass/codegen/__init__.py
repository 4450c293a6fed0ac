from styledpass.codegen.generator import generate

__all__ = ["generate"]
