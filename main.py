from sequent import command, init, main


@command(arity=2, doc="Print the sum of two integers.")
def add_two_values(params):
    left, right = params[0].int(), params[1].int()
    if not (left.result and right.result):
        return False
    params.console.print(left.value + right.value)
    return True


@command(doc="Always fails and stops the remaining commands.", halt_on_fail=True)
def must_pass(params):
    return False


if __name__ == '__main__':
    init("sequent-demo", "0.0.0")
    main()
