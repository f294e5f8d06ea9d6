"""
Method declaration module

Generates extern method signatures. A signature is built in its own
buffer because it is only known to be declarable once every parameter
has been resolved.
"""

from typing import Optional, TYPE_CHECKING
import logging

from .codegen import CodeGen, is_valid_identifier
from .ir import FunctionFlags

if TYPE_CHECKING:
    from .ir import NativeFunction
    from .types import TypeMapper

logger = logging.getLogger(__name__)


class FuncGenerator:
    """Generates method declarations"""

    def __init__(self, type_mapper: 'TypeMapper'):
        self.type_mapper = type_mapper

    def generate(self, func: 'NativeFunction') -> Optional[CodeGen]:
        """Build the declaration of a method, or None if it cannot be declared"""
        if not is_valid_identifier(func.name):
            logger.debug('function %s: reserved or invalid name', func.name)
            return None

        prefix = ''
        if func.has_any(FunctionFlags.CONST):
            prefix += '@:thisConst '
        if func.has_any(FunctionFlags.STATIC):
            prefix += 'static '
        elif func.has_any(FunctionFlags.FINAL):
            prefix += '@:final '
        prefix += 'public function ' if func.has_any(FunctionFlags.PUBLIC) else 'private function '

        args = []
        return_type = None
        for param in func.params:
            if return_type is not None:
                logger.debug('function %s: parameter %s after the return value', func.name, param.name)
                return None
            param_type = self.type_mapper.resolve(param)
            if param_type is None:
                logger.debug('function %s: parameter %s not supported', func.name, param.name)
                return None
            if param.is_return:
                return_type = param_type
            elif not is_valid_identifier(param.name):
                logger.debug('function %s: reserved parameter name %s', func.name, param.name)
                return None
            else:
                args.append(f'{param.name} : {param_type}')

        buf = CodeGen()
        if func.tooltip:
            buf.comment(func.tooltip)
        buf.line(f"{prefix}{func.name}({', '.join(args)}) : {return_type or 'Void'};")
        return buf
