"""Handles interactive/command-line mode for the yai interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """yai interpreter shell."""
    intro = "yai :: yet another interpreter\nType 'help' for more information, 'exit' or Ctrl-D to leave."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary yai code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            source, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if self.sess.add(source):
                self.sess.run()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg or self._tmp_line:
            return self.default(f"help {arg}")

        print("Welcome to the yai interpreter!\n\n"
              "yai is a small dynamically-typed scripting language with C-like syntax. Statements end\n"
              "with ';', blocks use '{ }', and functions are declared with 'fun'. For example:\n\n"
              "    var x = 10;\n"
              "    for (var i = 0; i < 3; i = i + 1) print i + x;\n"
              "    fun add(a, b) { return a + b; }\n"
              "    print add(x, 3);\n\n"
              "Bindings are kept between lines. A line with unclosed braces or parentheses continues\n"
              "on the next one.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            self.default("")
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return True

    def do_exit(self, arg):
        """Exits interpreter. 'exit' followed by anything else is yai code, ex: 'exit = 1;'."""
        if arg or self._tmp_line:
            return self.default(f"exit {arg}")
        return True
