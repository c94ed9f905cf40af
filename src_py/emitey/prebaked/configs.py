from emitey._types import EmitConfig

python = EmitConfig(max_columns=79, indent_step=4)
c_family = EmitConfig(max_columns=100, indent_step=4)
lisp = EmitConfig(max_columns=80, indent_step=2)
