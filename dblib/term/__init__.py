"""Query splitting, result printing, a REPL and an entry point for interactive database clients."""