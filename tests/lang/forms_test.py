import unittest

from arp.lang.error import ArityError, DomainError, OperandTypeError, UnboundParameterError
from arp.lang.evaluator import evaluate, render, truthy
from arp.lang.forms import FunctionDefinition
from arp.lang.lexical import tokenize
from arp.lang.parser import parse


def run(source):
    program, __ = parse(tokenize(source))
    return evaluate(program)


class ArithmeticTestCase(unittest.TestCase):

    def test_evaluate(self):
        cases = {
            "(+ 1 2)": 3,
            '(+ "a" "b")': "ab",
            '(+ "a" "b" "c")': "abc",
            "(+)": 0,
            "(- 10 3 2)": 5,
            "(- 5)": 5,
            "(* 2 3 4)": 24,
            "(*)": 1,
            "(/ 20 2 5)": 2,
            "(/ 7 2)": 3.5,
            "(re 10 3)": 1,
            "(re 9 3)": 0,
            "(re (- 0 7) 2)": -1,
            "(re 7 (- 0 2))": 1,
            "(+ 1 (* 2 3) (- 10 4))": 13,
            "(- (* 3 (+ 1 1)) (/ 8 4))": 4,
        }
        for case, result in cases.items():
            self.assertEqual(result, run(case), case)

    def test_left_to_right(self):
        self.assertEqual(10 - 3 - 2, run("(- 10 3 2)"))
        self.assertEqual(-5, run("(- 2 3 4)"))
        self.assertEqual(100 / 5 / 4, run("(/ 100 5 4)"))
        self.assertIsInstance(run("(/ 20 2 5)"), int)

    def test_type_errors(self):
        should_raise = ['(+ 1 "a")', '(+ "a" 1)', '(- "a" 1)', '(* 2 "b")', '(/ "a" 1)', '(re "a" 2)', '(re 2 "a")']
        for case in should_raise:
            self.assertRaises(OperandTypeError, run, case)

    def test_domain_errors(self):
        should_raise = ["(/ 4 0)", "(/ 0 4)", "(/ 8 2 (- 2 2))", "(re 10 0)", "(/ 1" + "0" * 399 + "1 2)"]
        for case in should_raise:
            self.assertRaises(DomainError, run, case)

    def test_arity_errors(self):
        should_raise = ["(re 10 3 1)", "(re 10)", "(re)", "(-)", "(/)"]
        for case in should_raise:
            self.assertRaises(ArityError, run, case)


class ConditionalTestCase(unittest.TestCase):

    def test_evaluate(self):
        cases = {
            '(if 1 "yes" "no")': "yes",
            '(if 0 "yes" "no")': "no",
            '(if "x" "yes" "no")': "yes",
            '(if "" "yes" "no")': "no",
            '(if (- 2 2) "yes" "no")': "no",
            '(if (re 3 2) "odd" "even")': "odd",
            '(if 1 "yes")': "yes",
        }
        for case, result in cases.items():
            self.assertEqual(result, run(case), case)

        self.assertIsNone(run('(if 0 "yes")'))

    def test_only_taken_branch_evaluated(self):
        self.assertEqual(1, run("(if 1 1 (/ 1 0))"))
        self.assertEqual(2, run("(if 0 (/ 1 0) 2)"))

    def test_arity(self):
        should_raise = ["(if 1)", "(if)", "(if 1 2 3 4)"]
        for case in should_raise:
            self.assertRaises(ArityError, run, case)

    def test_truthy(self):
        should_fail = [0, 0.0, "", False, None]
        for case in should_fail:
            self.assertFalse(truthy(case), case)

        should_pass = [1, -1, 0.5, "a", "0", True]
        for case in should_pass:
            self.assertTrue(truthy(case), case)


class FunctionTestCase(unittest.TestCase):

    def test_call(self):
        cases = {
            "(defunc add (a b) (+ a b)) (add 2 3)": 5,
            '(defunc greet (name) (+ "hello, " name)) (greet "arp")': "hello, arp",
            "(defunc five () 5) (five)": 5,
            "(defunc first (a) a) (first 1 2)": 1,
            "(defunc inc (n) (+ n 1)) (defunc twice (n) (inc (inc n))) (twice 5)": 7,
            "(defunc add (a b) (+ a b)) (add (1 2))": 3,
            "(defunc add (a b) (+ a b)) (add 1 (2))": 3,
            '(defunc parity (n) (if (re n 2) "odd" "even")) (parity 10)': "even",
        }
        for case, result in cases.items():
            self.assertEqual(result, run(case), case)

    def test_arguments_use_caller_context(self):
        source = "(defunc sub (a b) (- a b)) (defunc swap (a b) (sub b a)) (swap 10 3)"
        self.assertEqual(-7, run(source))

    def test_missing_argument(self):
        with self.assertRaises(UnboundParameterError) as cm:
            run("(defunc add (a b) (+ a b)) (add 2)")
        self.assertIn("'b'", cm.exception.msg)

    def test_no_closures(self):
        source = "(defunc g (y) x) (defunc f (x) (g 1)) (f 5)"
        self.assertRaises(UnboundParameterError, run, source)

    def test_definition_has_no_value(self):
        self.assertIsNone(run("(defunc f (a) a)"))
        self.assertIsNone(FunctionDefinition().evaluate({}))


class SequenceTestCase(unittest.TestCase):

    def test_aggregation(self):
        cases = {
            "(+ 1 2)": 3,
            '(+ 1 2) (+ "a" "b")': "3\nab",
            "(+ 1 2) (if 0 1) (* 2 2)": "3\n4",
            "((+ 1 2))": 3,
            "((+ 1 2) (+ 3 4))": "3\n7",
            "(defunc add (a b) (+ a b)) (add 2 3)": 5,
        }
        for case, result in cases.items():
            self.assertEqual(result, run(case), case)

        self.assertIsNone(run(""))
        self.assertIsNone(run("()"))

    def test_evaluate_twice(self):
        program, __ = parse(tokenize("(defunc add (a b) (+ a b)) (add 2 3) (add 4 5)"))
        self.assertEqual(evaluate(program), evaluate(program))

    def test_render(self):
        cases = {None: "", True: "true", False: "false", 3: "3", 3.5: "3.5", "ab": "ab"}
        for case, result in cases.items():
            self.assertEqual(result, render(case), case)


class DisplayTestCase(unittest.TestCase):

    def test_display(self):
        program, __ = parse(tokenize('(+ 1 "a")'))
        expected = "Add('+', children=[\n    Primitive('1'),\n    Primitive('a')\n])"
        self.assertEqual(expected, program.children[0].display())
        self.assertEqual("Primitive('1')", program.children[0].children[0].display())


if __name__ == '__main__':
    unittest.main()
