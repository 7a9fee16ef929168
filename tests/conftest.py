from __future__ import annotations

import pytest


# Formato viejo: resumen en tabla de ancho fijo, fechas en mayúsculas
LEGACY_TEXT = """\
                         WESTPAC BANKING CORPORATION
                         ABN 33 007 457 141

 STATEMENT NO. 12            FOR THE PERIOD FROM 28 DEC 2022 TO 05 JAN 2023

   OPENING BALANCE      TOTAL CREDITS      TOTAL DEBITS      CLOSING BALANCE
   - $100.00            $250.00            $180.00           - $30.00

 DATE   TRANSACTION DESCRIPTION                       DEBIT      CREDIT      BALANCE
 29 DEC SALARY ACME PTY LTD                                      250.00       150.00
 02 JAN EFTPOS PURCHASE
        WOOLWORTHS 1234
        SYDNEY AU                                     80.00                    70.00
 04 JAN RENT                                         100.00                   -30.00
 05 JAN CLOSING BALANCE                                                       -30.00
 06 JAN NO DEBE APARECER                               1.00                   -31.00
"""

# Formato nuevo: resumen en líneas sueltas, encabezado de columnas repetido por página
MODERN_TEXT = """\
Westpac Choice
Statement Period          From Last Statement Dated 28 Dec 2022 to 05 Jan 2023

Opening Balance                                  + $1,000.00
Total credits                                    + $2,500.00
Total debits                                     - $1,180.50
Closing Balance                                  + $2,319.50

Date     Description of transaction                    Debit         Credit         Balance
29 Dec   DEPOSIT ONLINE 1234 SALARY                                2,500.00        3,500.00
30 Dec   EFTPOS PURCHASE
         COLES 0456 SYDNEY                                80.50                    3,419.50

                                                                          Page 1 of 2
Date     Description of transaction                    Debit         Credit         Balance
03 Jan   WITHDRAWAL ONLINE RENT                       1,100.00                     2,319.50
05 Jan   CLOSING BALANCE                                                           2,319.50
"""


@pytest.fixture
def legacy_text() -> str:
    return LEGACY_TEXT


@pytest.fixture
def modern_text() -> str:
    return MODERN_TEXT
