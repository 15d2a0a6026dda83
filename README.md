# belinterp

belinterp is a lexer and expression evaluator for Bel, a small scripting language. Bel has exact rational numbers, strings, booleans, arrays, block scopes and user functions. belinterp is a library. It has no command-line tool.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Lexing

`belinterp.lexer.Lexer(source, is_file=True)` reads program text. By default `source` is the name of a file to read. With `is_file=False`, `source` is the program text itself. `scan()` returns a list of `Token` objects. Each token has these fields:

- `kind`: a `TokenKind`.
- `line`: the line number.
- `value`: the token's text.

```python
from belinterp.lexer import Lexer, TokenKind

tokens = Lexer('x = "hi" -- a comment\n', is_file=False).scan()
kinds = [tok.kind for tok in tokens]
```

The lexer handles these forms:

- `--` starts a comment that runs to the end of the line.
- `--[[ ... ]]` is a comment that may span several lines.
- Strings may contain the escapes `\t`, `\n`, `\r`, `\\` and `\"`. Any other escaped character is dropped.
- A number may be written as `12`, `1.5` or `3/4`. Each of these forms is one `NUMBER` token.
- A newline becomes a `SEPARATOR` token.
- `->`, `<=` and `>=` are each one token.

Malformed input raises `belinterp.errors.LexerError`, and the message names the offending line. These cases are malformed:

- a file that cannot be opened;
- a multi-line comment that is not closed;
- a newline inside a string.

## Evaluating expressions

You build expression trees by hand from the classes in these modules:

- `belinterp.expression`:
  - `Boolean`.
  - `Number`, which holds an exact `Fraction`.
  - `String`.
  - `Symbol`, which looks its name up in the environment.
  - `Array`, whose elements are reached by index paths with `get` and `set`.
  - `Reference`, a handle that every copy shares.
  - `Void`.
- `belinterp.operators`:
  - `Addition` adds two numbers. If either operand is a string, it concatenates.
  - `Division` divides two numbers.
  - `Comparison` tests two numbers, two booleans or two strings for equality.
  - `Declaration` binds a name to void in the innermost scope.
  - `Assignment` assigns to a declared name, or to an array element through a reference.
  - `Block` evaluates its content in a fresh scope.
  - `IfStatement` chooses a body by a boolean condition.
- `belinterp.function`:
  - `Function` is a user function. Its parameters are bound in the innermost scope before the body runs.

Each node is evaluated with `eval(env)` against a `belinterp.environment.Environment`. The environment holds a stack of `Frame` scopes, innermost first. Names are looked up from the innermost frame outwards. `Environment.scope()` is a context manager that pushes a fresh frame for the duration of its block.

```python
from belinterp.environment import Environment
from belinterp.expression import Number, String
from belinterp.operators import Addition, Assignment, Block, Declaration

env = Environment()
Declaration("x").eval(env)
Assignment("x", Addition(Number(1), Number("1/2"))).eval(env)
print(env.retrieve("x"))                          # 3/2
print(Addition(String("n="), Number(2)).eval(env))  # n=2
```

`belinterp.function.builtins()` returns a dict that maps names to fresh built-in procedures:

- `println` prints its evaluated arguments to standard output, separated by spaces.
- `defined` tells whether a symbol is bound in the innermost scope.
- `type` returns the type name of its argument as a symbol.
- `array` returns a reference to a new array of the given length. Only the first argument is used.
- `len` returns the length of a referenced array or string.

## Errors

All errors derive from `belinterp.errors.BelError`.

Runtime errors raise `belinterp.errors.Panic`. Examples:

- adding a boolean;
- dividing by zero;
- indexing an array out of range;
- assigning to a name that was never declared;
- declaring a name twice in one scope;
- calling a function with the wrong number of arguments.

Internal faults raise `belinterp.errors.InterpreterError`. Examples are cloning an expression that cannot be cloned, and reading a `GuardedPosition` past its end.

## Parsing helpers

`belinterp.cursor` provides two helpers for walking a token list:

- `GuardedPosition` is a bounds-checked cursor over a sequence. It has the methods `current()`, `advance()`, `retreat()` and `at_end()`.
- `BacktrackingGuard` is a context manager. When its block exits, it restores the cursor's index, unless `no_backtrack()` was called.

## What the package does not do

belinterp has no parser. Nothing turns the lexer's tokens into expression trees, so you cannot run a Bel program from its source text. Trees must be built in Python.

There is also no command or interactive prompt for running scripts.

The only arithmetic is addition and division. The only comparison is equality.