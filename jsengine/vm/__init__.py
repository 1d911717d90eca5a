"""Stack-based bytecode virtual machine: values, instructions, heap, frames and executor."""