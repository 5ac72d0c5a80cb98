from sheetlint.lexer.tokenizer import Tokenizer, tokenize, top_level_indices

__all__ = ["tokenize", "Tokenizer", "top_level_indices"]
